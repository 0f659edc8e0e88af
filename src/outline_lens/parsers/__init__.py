"""
Outline providers for OutlineLens.

This module provides outline extraction using tree-sitter for JavaScript,
TypeScript and Vue single-file components.
"""

from .treesitter_outline import TreeSitterOutlineProvider
from .language_configs import (
    get_language_for_file,
    get_config_for_language,
    get_supported_extensions,
    EXTENSION_MAP,
    LANGUAGE_CONFIGS,
)

__all__ = [
    "TreeSitterOutlineProvider",
    "get_language_for_file",
    "get_config_for_language",
    "get_supported_extensions",
    "EXTENSION_MAP",
    "LANGUAGE_CONFIGS",
]
