"""
Abstract interfaces for OutlineLens components.

This module defines the contracts that keep the classification pipeline
independent of where outlines come from. The engine only ever talks to an
IOutlineProvider; the tree-sitter provider is one implementation, test
doubles and editor bridges are others.

When to implement each interface:
    - IOutlineProvider: When adding a new source of raw outlines
"""

from abc import ABC, abstractmethod
from typing import List

from .models import Document, OutlineNode


class IOutlineProvider(ABC):
    """Abstract interface for outline providers.

    Outline providers turn a document into a forest of raw outline nodes
    (name, kind, range, detail, children). They do no framework-specific
    interpretation; that is the classifier's job.

    Responsibilities:
        - Report whether a document can be outlined
        - Produce the outline forest asynchronously
        - Report supported file extensions

    Implementation considerations:
        - An empty list means "no symbols"; it is not an error
        - Unexpected failures should raise OutlineError; the engine catches
          them and degrades to an empty result
        - Ranges must be zero-based and expressed in document coordinates

    Example implementation:
        >>> class StaticProvider(IOutlineProvider):
        ...     def __init__(self, nodes):
        ...         self.nodes = nodes
        ...
        ...     def can_provide(self, filepath: str) -> bool:
        ...         return True
        ...
        ...     async def get_outline(self, document: Document) -> List[OutlineNode]:
        ...         return list(self.nodes)
        ...
        ...     def get_supported_extensions(self) -> List[str]:
        ...         return []
    """

    @abstractmethod
    def can_provide(self, filepath: str) -> bool:
        """Determine if this provider can outline the given file.

        Args:
            filepath: Path of the document to check

        Returns:
            True if this provider can outline the file, False otherwise
        """
        pass  # pragma: no cover

    @abstractmethod
    async def get_outline(self, document: Document) -> List[OutlineNode]:
        """Build the outline forest for a document.

        This is the single suspension point of a refresh.

        Args:
            document: The document to outline

        Returns:
            Top-level outline nodes in source order (possibly empty)

        Raises:
            OutlineError: If the document cannot be outlined
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_supported_extensions(self) -> List[str]:
        """Return list of file extensions this provider supports.

        Extensions include the leading dot (e.g., '.vue', not 'vue').

        Returns:
            List of file extensions (with leading dots)
        """
        pass  # pragma: no cover
