"""Test state management for isolation between tests and calls."""
import asyncio
import pytest
from pathlib import Path
from outline_lens.mcp.state import (
    get_state, reset_state, MCPSessionState
)
from outline_lens.mcp.server import analyze_file as analyze_file_tool

# Access underlying function from FastMCP FunctionTool wrapper
analyze_file_fn = analyze_file_tool.fn


def analyze_file(**kwargs):
    """Helper to run async analyze_file function synchronously."""
    return asyncio.run(analyze_file_fn(**kwargs))


class TestStateIsolation:
    """Verify state isolation works correctly for testing."""

    def test_initial_state_is_empty(self):
        reset_state()
        state = get_state()

        assert state.engine is None
        assert state.document_path is None
        assert state.is_loaded is False

    def test_state_persists_between_calls(self, vue_file):
        reset_state()

        # First call sets state
        analyze_file(path=str(vue_file))
        state1 = get_state()
        assert state1.is_loaded is True

        # Second call sees same state
        state2 = get_state()
        assert state2.is_loaded is True
        assert state2.document_path == state1.document_path

    def test_engine_is_reused_across_files(self, vue_file, react_file):
        analyze_file(path=str(vue_file))
        engine = get_state().engine

        analyze_file(path=str(react_file))

        assert get_state().engine is engine
        assert get_state().document_path == Path(react_file).resolve()

    def test_reset_clears_state(self, vue_file):
        analyze_file(path=str(vue_file))
        assert get_state().is_loaded is True

        reset_state()

        assert get_state().is_loaded is False
        assert get_state().engine is None

    def test_multiple_resets_are_safe(self):
        reset_state()
        reset_state()
        reset_state()

        state = get_state()
        assert state is not None
        assert not state.is_loaded


class TestStateSingleton:
    """Test singleton behavior of state."""

    def test_same_instance_returned(self):
        reset_state()

        state1 = get_state()
        state2 = get_state()

        assert state1 is state2

    def test_new_instance_after_reset(self):
        state1 = get_state()
        reset_state()
        state2 = get_state()

        # After reset, we get a fresh instance
        assert state1 is not state2

    def test_engine_without_document_is_not_loaded(self):
        state = MCPSessionState(engine=object())
        assert state.is_loaded is False
