"""sharpmetrics: code metrics and Cognitive Complexity for C# sources.

Example:
    >>> from sharpmetrics import CognitiveComplexityRule, TreeSitterParser, compute_metrics
    >>> tree = TreeSitterParser().parse_tree(source, file_path="Program.cs")
    >>> compute_metrics(tree).lines_of_code
    >>> CognitiveComplexityRule().findings(tree)
"""

from .analysis import (
    CognitiveComplexityRule,
    CognitiveComplexityWalker,
    ComplexityThresholds,
    MetricsSnapshot,
    compute_complexity,
    compute_metrics,
)
from .config import AnalyzerSettings, get_settings
from .parser import ParserError, TreeSitterParser
from .syntax import Kind, SyntaxNode, SyntaxTree, SyntaxTreeBuilder

__version__ = "0.1.0"

__all__ = [
    "AnalyzerSettings",
    "CognitiveComplexityRule",
    "CognitiveComplexityWalker",
    "ComplexityThresholds",
    "Kind",
    "MetricsSnapshot",
    "ParserError",
    "SyntaxNode",
    "SyntaxTree",
    "SyntaxTreeBuilder",
    "TreeSitterParser",
    "compute_complexity",
    "compute_metrics",
    "get_settings",
]
