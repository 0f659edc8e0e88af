import pytest
from typing import List
from outline_lens.core.interfaces import IOutlineProvider
from outline_lens.core.models import Document, OutlineKind, OutlineNode, Range
from outline_lens.mcp.state import reset_state

VUE_SOURCE = '''<template>
  <div>
    <p>{{ count }}</p>
    <button @click="onClick">+</button>
  </div>
</template>

<script setup>
import { ref, computed, onMounted } from 'vue'

const count = ref(0)
const doubled = computed(() => count.value * 2)

function onClick() {
  count.value++
}

function useCounter() {
  return { count }
}

async function fetchUser(id) {
  return fetch('/api/users/' + id)
}

const formatDate = (value) => value

onMounted(() => {
  fetchUser(1)
})
</script>
'''

REACT_SOURCE = '''import React, { useState, useEffect } from 'react'

export function Counter() {
  const [count, setCount] = useState(0)

  useEffect(() => {
    document.title = `Clicked ${count} times`
  })

  const handleChange = (event) => setCount(Number(event.target.value))

  return (
    <div>
      <input onChange={handleChange} />
      <span>{count}</span>
    </div>
  )
}

function useToggle(initial) {
  const [on, setOn] = useState(initial)
  return [on, () => setOn(!on)]
}

function formatCount(value) {
  return String(value)
}
'''


def _node(name, kind, start, end=None, children=(), detail=""):
    return OutlineNode(
        name=name,
        kind=kind,
        range=Range.from_lines(start, start if end is None else end),
        detail=detail,
        children=children,
    )


class FakeOutlineProvider(IOutlineProvider):
    """In-memory outline provider.

    Args:
        outline: Nodes returned by every get_outline call
        error: Raised from get_outline instead of returning
    """

    def __init__(self, outline=None, error=None):
        self.outline = list(outline or [])
        self.error = error
        self.gate = None  # asyncio.Event awaited before answering
        self.calls = 0

    def can_provide(self, filepath: str) -> bool:
        return True

    async def get_outline(self, document: Document) -> List[OutlineNode]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.outline)

    def get_supported_extensions(self) -> List[str]:
        return ['.js', '.jsx', '.ts', '.tsx', '.vue']


@pytest.fixture(autouse=True)
def clean_state():
    """Reset MCP state before and after each test."""
    reset_state()
    yield
    reset_state()


@pytest.fixture
def vue_document():
    return Document(path="/project/src/Counter.vue", text=VUE_SOURCE)


@pytest.fixture
def vue_outline():
    """Outline of VUE_SOURCE as an editor would report it (zero-based lines)."""
    return [
        _node("count", OutlineKind.VARIABLE, 10),
        _node("doubled", OutlineKind.VARIABLE, 11),
        _node("onClick", OutlineKind.FUNCTION, 13, 15),
        _node("useCounter", OutlineKind.FUNCTION, 17, 19),
        _node("fetchUser", OutlineKind.FUNCTION, 21, 23),
        _node("formatDate", OutlineKind.FUNCTION, 25),
        _node("onMounted() callback", OutlineKind.FUNCTION, 27, 29),
    ]


@pytest.fixture
def react_document():
    return Document(path="/project/src/Counter.jsx", text=REACT_SOURCE)


@pytest.fixture
def react_outline():
    """Outline of REACT_SOURCE; handleChange is nested in Counter."""
    return [
        _node("Counter", OutlineKind.FUNCTION, 2, 17, children=[
            _node("handleChange", OutlineKind.FUNCTION, 9),
        ]),
        _node("useToggle", OutlineKind.FUNCTION, 19, 22),
        _node("formatCount", OutlineKind.FUNCTION, 24, 26),
    ]


@pytest.fixture
def make_provider():
    """Factory for FakeOutlineProvider instances."""
    return FakeOutlineProvider


@pytest.fixture
def vue_provider(vue_outline):
    return FakeOutlineProvider(vue_outline)


@pytest.fixture
def vue_file(tmp_path):
    """Write VUE_SOURCE to a temporary Counter.vue."""
    path = tmp_path / "Counter.vue"
    path.write_text(VUE_SOURCE)
    return path


@pytest.fixture
def react_file(tmp_path):
    """Write REACT_SOURCE to a temporary Counter.jsx."""
    path = tmp_path / "Counter.jsx"
    path.write_text(REACT_SOURCE)
    return path
