#!/usr/bin/env python3
"""
Demo script to exercise the OutlineLens MCP tools without an MCP client.
Analyses a file, then searches and filters its grouped outline.

Usage:
  python self_test/demo_outline.py [path_to_file]

If no path provided, writes a temporary sample Vue component.
"""
import sys
import json
import asyncio
import tempfile
import shutil
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

# Import MCP tools - access underlying functions from FastMCP wrappers
from outline_lens.mcp.server import (
    analyze_file as analyze_file_tool,
    search_symbols as search_symbols_tool,
    clear_search as clear_search_tool,
    apply_quick_filter as apply_quick_filter_tool,
    toggle_important_filter as toggle_important_filter_tool,
    get_symbol_stats as get_symbol_stats_tool,
    list_quick_filters as list_quick_filters_tool,
    list_supported_languages as list_supported_languages_tool
)

# Get underlying functions
analyze_file = analyze_file_tool.fn
search_symbols = search_symbols_tool.fn
clear_search = clear_search_tool.fn
apply_quick_filter = apply_quick_filter_tool.fn
toggle_important_filter = toggle_important_filter_tool.fn
get_symbol_stats = get_symbol_stats_tool.fn
list_quick_filters = list_quick_filters_tool.fn
list_supported_languages = list_supported_languages_tool.fn

console = Console()

SAMPLE_COMPONENT = '''<template>
  <div class="counter">
    <h1>{{ title }}</h1>
    <p>{{ count }} / {{ doubled }}</p>
    <button @click="increment">+1</button>
    <input @change="handleChange" />
  </div>
</template>

<script setup lang="ts">
import { ref, computed, watch, onMounted } from 'vue'
import { useRouter } from 'vue-router'

const title = ref('Counter')
const count = ref(0)
const doubled = computed(() => count.value * 2)
const router = useRouter()

function increment() {
  count.value++
}

function handleChange(event: Event) {
  console.log(event)
}

async function fetchUser(id: number) {
  const response = await fetch(`/api/users/${id}`)
  return response.json()
}

const formatLabel = (value: number) => `#${value}`

watch(count, (value) => {
  console.log('count changed', value)
})

onMounted(() => {
  fetchUser(1)
})
</script>
'''


def create_sample_file(base_path: Path) -> Path:
    """Write a small Vue single-file component for the demo."""
    sample = base_path / "Counter.vue"
    sample.write_text(SAMPLE_COMPONENT)
    return sample


def format_json(data: dict) -> str:
    """Format dict as colored JSON."""
    return json.dumps(data, indent=2, default=str, ensure_ascii=False)


def print_tool_call(name: str, params: dict = None):
    """Print a tool call header."""
    params_str = format_json(params) if params else "{}"
    console.print(f"\n[bold cyan]>>> Calling:[/bold cyan] [yellow]{name}[/yellow]")
    if params:
        console.print(Panel(
            Syntax(params_str, "json", theme="monokai"),
            title="Parameters",
            border_style="dim"
        ))


def print_result(result: dict):
    """Print a tool result."""
    console.print(Panel(
        Syntax(format_json(result), "json", theme="monokai"),
        title="Result",
        border_style="green"
    ))


def print_groups(result: dict):
    """Render the grouped outline as a tree."""
    tree = Tree(f"[bold]{Path(result['file']).name}[/bold] ({result['framework']})")

    def add_symbols(branch, symbols):
        for symbol in symbols:
            node = branch.add(f"{symbol['label']}  [dim]{symbol['description']}[/dim]")
            add_symbols(node, symbol['children'])

    for group in result["groups"]:
        style = "bold" if group["expanded"] else "dim"
        add_symbols(tree.add(f"[{style}]{group['label']}[/{style}]"), group["symbols"])

    console.print(tree)


def run_demo(file_path: Path):
    """Run the full demo sequence."""

    console.print(Panel.fit(
        "[bold]OutlineLens MCP Demo[/bold]\n"
        "Testing all MCP tools with real output",
        border_style="blue"
    ))

    console.print(f"\n[bold]File:[/bold] {file_path}\n")

    # 1. list_supported_languages
    console.rule("[bold magenta]1. list_supported_languages[/bold magenta]")
    console.print("Shows all languages and file extensions supported.")

    print_tool_call("list_supported_languages")
    result = list_supported_languages()

    # Pretty print as table
    table = Table(title="Supported Languages")
    table.add_column("Language", style="cyan")
    table.add_column("Extensions", style="green")
    for lang, exts in sorted(result["languages"].items()):
        table.add_row(lang, ", ".join(exts))
    console.print(table)

    # 2. analyze_file
    console.rule("[bold magenta]2. analyze_file[/bold magenta]")
    console.print("Outlines, classifies and groups the file's symbols.")

    print_tool_call("analyze_file", {"path": str(file_path)})

    # analyze_file is async, so we run it with asyncio
    result = asyncio.run(analyze_file(path=str(file_path)))
    print_groups(result)

    # 3. get_symbol_stats
    console.rule("[bold magenta]3. get_symbol_stats[/bold magenta]")
    print_tool_call("get_symbol_stats")
    print_result(get_symbol_stats())

    # 4. search_symbols
    console.rule("[bold magenta]4. search_symbols[/bold magenta]")
    console.print("Narrows the outline; parents of matches are kept.")

    for query in ("count", "api"):
        print_tool_call("search_symbols", {"query": query})
        print_groups(search_symbols(query=query))

    print_tool_call("clear_search")
    clear_search()

    # 5. Quick filters
    console.rule("[bold magenta]5. apply_quick_filter[/bold magenta]")
    print_tool_call("list_quick_filters")
    filters = list_quick_filters()

    table = Table(title="Quick Filters")
    table.add_column("Key", style="yellow")
    table.add_column("Id", style="cyan")
    table.add_column("Description", style="green")
    for quick_filter in filters["filters"]:
        table.add_row(quick_filter["hotkey"] or "", quick_filter["id"], quick_filter["tooltip"])
    console.print(table)

    print_tool_call("apply_quick_filter", {"filter_id": "events"})
    print_groups(apply_quick_filter(filter_id="events"))

    print_tool_call("apply_quick_filter", {"filter_id": "events"})
    console.print("[yellow]Applying the active filter again clears it[/yellow]")
    print_groups(apply_quick_filter(filter_id="events"))

    # 6. Important only
    console.rule("[bold magenta]6. toggle_important_filter[/bold magenta]")
    print_tool_call("toggle_important_filter")
    print_groups(toggle_important_filter())
    toggle_important_filter()

    # Summary
    console.print(Panel.fit(
        "[bold green]Demo Complete![/bold green]\n\n"
        "MCP tools exercised:\n"
        "  - list_supported_languages\n"
        "  - analyze_file\n"
        "  - get_symbol_stats\n"
        "  - search_symbols / clear_search\n"
        "  - list_quick_filters / apply_quick_filter\n"
        "  - toggle_important_filter",
        border_style="green"
    ))


def main():
    """Main entry point."""
    temp_dir = None

    try:
        if len(sys.argv) > 1:
            # Use provided path
            file_path = Path(sys.argv[1]).resolve()
            if not file_path.exists():
                console.print(f"[red]Error: Path does not exist: {file_path}[/red]")
                sys.exit(1)
            if not file_path.is_file():
                console.print(f"[red]Error: Path is not a file: {file_path}[/red]")
                sys.exit(1)
        else:
            # Create temp file
            temp_dir = tempfile.mkdtemp(prefix="outline_lens_demo_")
            file_path = create_sample_file(Path(temp_dir))
            console.print(f"[dim]Created temporary sample component at: {file_path}[/dim]")

        run_demo(file_path)

    except KeyboardInterrupt:
        console.print("\n[yellow]Demo interrupted[/yellow]")
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise
    finally:
        # Clean up temp dir if we created one
        if temp_dir:
            shutil.rmtree(temp_dir)
            console.print("[dim]Cleaned up temporary files[/dim]")


if __name__ == "__main__":
    main()
