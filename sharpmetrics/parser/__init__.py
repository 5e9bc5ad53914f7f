"""C# front end: tree-sitter parsing into normalized syntax trees.

Example:
    >>> from sharpmetrics.parser import TreeSitterParser
    >>> parser = TreeSitterParser()
    >>> result = await parser.parse_file("Program.cs")
    >>> result.tree.root.kind
    <Kind.COMPILATION_UNIT: 'compilation_unit'>
"""

from .base import BaseParser, ParserError
from .models import ParseResult, SyntaxErrorInfo
from .normalizer import CSharpNormalizer
from .tree_sitter import TreeSitterParser

__all__ = [
    "BaseParser",
    "ParserError",
    "TreeSitterParser",
    "CSharpNormalizer",
    "ParseResult",
    "SyntaxErrorInfo",
]
