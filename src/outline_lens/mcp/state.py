"""Session state management for MCP server."""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from outline_lens.engine.outline_engine import SymbolOutlineEngine


@dataclass
class MCPSessionState:
    """Singleton state for MCP server session."""
    engine: Optional["SymbolOutlineEngine"] = None
    document_path: Optional[Path] = None

    @property
    def is_loaded(self) -> bool:
        """Check if a file has been analysed in this session."""
        return self.engine is not None and self.document_path is not None


_state: Optional[MCPSessionState] = None


def get_state() -> MCPSessionState:
    """Get or create the singleton state instance."""
    global _state
    if _state is None:
        _state = MCPSessionState()
    return _state


def reset_state() -> None:
    """Reset the singleton state (useful for testing)."""
    global _state
    _state = None
