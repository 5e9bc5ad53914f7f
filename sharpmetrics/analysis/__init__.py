"""Metric computation over C# syntax trees.

This module provides:
- Node classification predicates
- Whole-file metrics (lines, comments, counts, public API)
- Cognitive Complexity scoring and the threshold rule built on it
"""

from .classifier import (
    is_class_like,
    is_comment,
    is_complexity_increasing,
    is_documentation_comment,
    is_function_like,
    is_member_declaration,
    is_public,
    is_return_but_not_last,
    is_statement,
)
from .cognitive import CognitiveComplexityWalker, WalkerState, compute_complexity
from .errors import AnalysisError, InvariantViolationError, LanguageMismatchError
from .metrics import MetricsCalculator, compute_metrics
from .models import (
    CognitiveComplexityResult,
    ComplexityDistribution,
    ComplexityIncrement,
    ComplexityThresholds,
    DeclarationCategory,
    DeclarationComplexity,
    MetricsSnapshot,
)
from .rules import CognitiveComplexityRule

__all__ = [
    # Models
    "CognitiveComplexityResult",
    "ComplexityDistribution",
    "ComplexityIncrement",
    "ComplexityThresholds",
    "DeclarationCategory",
    "DeclarationComplexity",
    "MetricsSnapshot",
    # Errors
    "AnalysisError",
    "InvariantViolationError",
    "LanguageMismatchError",
    # Classifier
    "is_class_like",
    "is_comment",
    "is_complexity_increasing",
    "is_documentation_comment",
    "is_function_like",
    "is_member_declaration",
    "is_public",
    "is_return_but_not_last",
    "is_statement",
    # Metrics
    "MetricsCalculator",
    "compute_metrics",
    # Cognitive complexity
    "CognitiveComplexityWalker",
    "WalkerState",
    "compute_complexity",
    "CognitiveComplexityRule",
]
