"""
Framework detection and symbol classification.

Turns a raw outline into the enriched symbol forest: detects the document's
framework, classifies each outline node and records its usage context.
"""

from .framework_detector import detect_framework
from .context_analyzer import ContextAnalyzer
from .symbol_classifier import SymbolClassifier

__all__ = [
    "detect_framework",
    "ContextAnalyzer",
    "SymbolClassifier",
]
