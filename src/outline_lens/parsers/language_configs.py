"""
Language-specific configurations for tree-sitter outlining.

This module maps front-end file extensions to tree-sitter grammars and lists,
per grammar, the AST node types that become outline entries.

Supported Languages:
    - JavaScript (.js, .jsx, .mjs, .cjs)
    - TypeScript (.ts, .mts, .cts)
    - TSX (.tsx)
    - Vue single-file components (.vue; the <script> blocks are outlined
      with the JavaScript or TypeScript grammar depending on ``lang``)

Usage:
    >>> language = get_language_for_file("Counter.vue")
    >>> language
    'vue'
    >>> config = get_config_for_language("typescript")
    >>> config['class_types']
    ['class_declaration', 'abstract_class_declaration']

Adding New Languages:
    1. Add file extension mappings to EXTENSION_MAP
    2. Create language config dict with required node types
    3. Add tests for the new language
"""

from pathlib import Path
from typing import Any, Dict, Optional, Set

from outline_lens.core.exceptions import ConfigurationError


# ==============================================================================
# Extension to Language Mapping
# ==============================================================================

EXTENSION_MAP: Dict[str, str] = {
    # JavaScript (the javascript grammar parses JSX)
    '.js': 'javascript',
    '.jsx': 'javascript',
    '.mjs': 'javascript',  # ES6 modules
    '.cjs': 'javascript',  # CommonJS modules

    # TypeScript
    '.ts': 'typescript',
    '.mts': 'typescript',  # TypeScript ES6 modules
    '.cts': 'typescript',  # TypeScript CommonJS modules
    '.tsx': 'tsx',

    # Vue single-file components
    '.vue': 'vue',
}

# Vue <script lang="..."> -> grammar used for the block
VUE_SCRIPT_LANGUAGES: Dict[str, str] = {
    'js': 'javascript',
    'jsx': 'javascript',
    'ts': 'typescript',
    'tsx': 'tsx',
}

DEFAULT_VUE_SCRIPT_LANGUAGE = 'javascript'


# ==============================================================================
# Language Configurations
# ==============================================================================

_JAVASCRIPT_CONFIG: Dict[str, Any] = {
    'grammar': 'javascript',
    'function_types': [
        'function_declaration',            # function foo() {}
        'generator_function_declaration',  # function* foo() {}
    ],
    'class_types': [
        'class_declaration',  # class MyClass {}
    ],
    'method_types': [
        'method_definition',  # Methods inside class bodies
    ],
    'field_types': [
        'field_definition',  # count = 0 (class fields)
    ],
    'variable_declaration_types': [
        'lexical_declaration',   # const / let
        'variable_declaration',  # var
    ],
    'declarator_types': [
        'variable_declarator',  # foo = ...
    ],
    'function_value_types': [
        'arrow_function',       # const foo = () => {}
        'function',             # const foo = function () {} (older grammars)
        'function_expression',  # const foo = function () {}
        'generator_function',   # const foo = function* () {}
    ],
    'export_types': [
        'export_statement',  # export ... / export default ...
    ],
    'expression_statement_types': [
        'expression_statement',  # onMounted(() => {})
    ],
    'call_types': [
        'call_expression',  # foo()
    ],
    'interface_types': [],
    'type_alias_types': [],
    'enum_types': [],

    # Examples of AST nodes:
    # function_declaration:
    #   name: identifier
    #   parameters: formal_parameters
    #   body: statement_block
    #
    # variable_declarator:
    #   name: identifier | object_pattern | array_pattern
    #   value: expression
    #
    # method_definition:
    #   name: property_identifier | private_property_identifier
    #   body: statement_block
}

_TYPESCRIPT_CONFIG: Dict[str, Any] = {
    **_JAVASCRIPT_CONFIG,
    'grammar': 'typescript',
    'function_types': [
        'function_declaration',
        'generator_function_declaration',
        'function_signature',  # declare function foo(): void
    ],
    'class_types': [
        'class_declaration',
        'abstract_class_declaration',
    ],
    'method_types': [
        'method_definition',
        'abstract_method_signature',
    ],
    'field_types': [
        'public_field_definition',  # private count: number = 0
    ],
    'interface_types': [
        'interface_declaration',  # interface Foo { ... }
    ],
    'type_alias_types': [
        'type_alias_declaration',  # type Foo = ...
    ],
    'enum_types': [
        'enum_declaration',  # enum Foo { ... }
    ],

    # variable_declarator (TypeScript):
    #   name: identifier
    #   type: type_annotation
    #   value: expression
}

LANGUAGE_CONFIGS: Dict[str, Dict[str, Any]] = {
    'javascript': _JAVASCRIPT_CONFIG,
    'typescript': _TYPESCRIPT_CONFIG,
    'tsx': {**_TYPESCRIPT_CONFIG, 'grammar': 'tsx'},
}


def get_language_for_file(filepath: str) -> Optional[str]:
    """
    Determine the language from a file path.

    Args:
        filepath: Path to the file (can be relative or absolute)

    Returns:
        Language name (e.g., 'javascript', 'vue') or None if not supported

    Examples:
        >>> get_language_for_file('App.tsx')
        'tsx'
        >>> get_language_for_file('notes.txt')
        None
    """
    return EXTENSION_MAP.get(Path(filepath).suffix.lower())


def get_vue_script_language(lang_attribute: Optional[str]) -> str:
    """
    Map a Vue ``<script lang="...">`` value to a grammar language.

    Unknown or missing values fall back to JavaScript.
    """
    if not lang_attribute:
        return DEFAULT_VUE_SCRIPT_LANGUAGE
    return VUE_SCRIPT_LANGUAGES.get(lang_attribute.lower(), DEFAULT_VUE_SCRIPT_LANGUAGE)


def get_config_for_language(language: str) -> Dict[str, Any]:
    """
    Retrieve the outline configuration for a grammar language.

    Args:
        language: Language name (e.g., 'javascript', 'tsx')

    Returns:
        Configuration dictionary with node type mappings

    Raises:
        ConfigurationError: If the language has no configuration
    """
    if language not in LANGUAGE_CONFIGS:
        raise ConfigurationError(
            f"Unsupported language: {language}. "
            f"Supported languages: {', '.join(LANGUAGE_CONFIGS.keys())}"
        )
    return LANGUAGE_CONFIGS[language]


def get_supported_extensions() -> Set[str]:
    """
    Get a set of all supported file extensions.

    Returns:
        Set of file extensions (including the dot)
    """
    return set(EXTENSION_MAP.keys())


def validate_config(language: str) -> bool:
    """
    Validate that a language configuration has all required fields.

    Args:
        language: Language name to validate

    Returns:
        True if configuration is valid

    Raises:
        ConfigurationError: If configuration is missing required fields
    """
    required_fields = [
        'grammar',
        'function_types',
        'class_types',
        'method_types',
        'field_types',
        'variable_declaration_types',
        'declarator_types',
        'function_value_types',
        'export_types',
        'expression_statement_types',
        'call_types',
    ]

    config = get_config_for_language(language)
    missing_fields = [f for f in required_fields if f not in config]

    if missing_fields:
        raise ConfigurationError(
            f"Configuration for {language} is missing required fields: {', '.join(missing_fields)}"
        )

    return True


# ==============================================================================
# Configuration Validation
# ==============================================================================

# Validate all configurations on module import
for _language in LANGUAGE_CONFIGS:
    validate_config(_language)
