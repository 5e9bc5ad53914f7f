"""Syntax tree model shared by the front end and the analysis layer."""

from .builder import SyntaxTreeBuilder
from .kinds import Kind
from .nodes import SourceSpan, SyntaxNode, SyntaxTree

__all__ = [
    "Kind",
    "SourceSpan",
    "SyntaxNode",
    "SyntaxTree",
    "SyntaxTreeBuilder",
]
