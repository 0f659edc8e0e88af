"""
Framework detection for front-end documents.

Decides whether a document is Vue-flavoured, React-flavoured or generic.
Evidence is consulted in a fixed order and the first match wins:

    1. File extension (.vue -> Vue; .jsx/.tsx -> React)
    2. Import lines mentioning vue / @vue/ or react / @react/
    3. Content keywords (defineComponent, <script setup> -> Vue;
       useState, useEffect, React. -> React)
    4. Otherwise General

Extension evidence always outranks content evidence.

Usage:
    >>> detect_framework("Counter.vue", "")
    <FrameworkType.VUE: 'vue'>
"""

import logging
from typing import Optional

from outline_lens.core.models import FrameworkType

logger = logging.getLogger(__name__)

VUE_EXTENSIONS = ('.vue',)
REACT_EXTENSIONS = ('.jsx', '.tsx')

VUE_IMPORT_MARKERS = ('vue', '@vue/')
REACT_IMPORT_MARKERS = ('react', '@react/')

VUE_CONTENT_MARKERS = ('defineComponent', '<script setup>')
REACT_CONTENT_MARKERS = ('useState', 'useEffect', 'React.')


def _detect_from_extension(file_name: str) -> Optional[FrameworkType]:
    if file_name.endswith(VUE_EXTENSIONS):
        return FrameworkType.VUE
    if file_name.endswith(REACT_EXTENSIONS):
        return FrameworkType.REACT
    return None


def _detect_from_imports(text: str) -> Optional[FrameworkType]:
    for line in text.split('\n'):
        if not line.strip().startswith('import'):
            continue
        # Vue markers are checked first on each line
        if any(marker in line for marker in VUE_IMPORT_MARKERS):
            return FrameworkType.VUE
        if any(marker in line for marker in REACT_IMPORT_MARKERS):
            return FrameworkType.REACT
    return None


def _detect_from_content(text: str) -> Optional[FrameworkType]:
    if any(marker in text for marker in VUE_CONTENT_MARKERS):
        return FrameworkType.VUE
    if any(marker in text for marker in REACT_CONTENT_MARKERS):
        return FrameworkType.REACT
    return None


def detect_framework(file_name: Optional[str], text: Optional[str]) -> FrameworkType:
    """
    Detect the front-end framework of a document.

    Total function: any input, including None, yields one of VUE, REACT or
    GENERAL and never raises.

    Args:
        file_name: File name or path of the document
        text: Full document text

    Returns:
        The detected FrameworkType

    Examples:
        >>> detect_framework("App.tsx", "")
        <FrameworkType.REACT: 'react'>
        >>> detect_framework("store.js", "import { ref } from 'vue'")
        <FrameworkType.VUE: 'vue'>
        >>> detect_framework("util.js", "export const x = 1")
        <FrameworkType.GENERAL: 'general'>
    """
    name = (file_name or "").lower()
    content = text or ""

    framework = (
        _detect_from_extension(name)
        or _detect_from_imports(content)
        or _detect_from_content(content)
        or FrameworkType.GENERAL
    )
    logger.debug(f"Detected framework {framework.value} for {file_name!r}")
    return framework
