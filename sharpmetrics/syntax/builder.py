"""Programmatic construction of syntax trees.

Hosts that already own a parser can translate their trees with
``SyntaxTreeBuilder`` instead of going through tree-sitter. Leaves are laid
out in the order they are created, separated by a single space, so nesting
builder calls in document order yields consistent spans and source text.

Example:
    >>> b = SyntaxTreeBuilder()
    >>> root = b.node(
    ...     Kind.COMPILATION_UNIT,
    ...     b.node(Kind.CLASS, b.token("class"), b.identifier("A", field="name")),
    ... )
    >>> tree = b.build(root)
    >>> tree.source
    'class A'
"""

from .kinds import Kind
from .nodes import SourceSpan, SyntaxNode, SyntaxTree


class SyntaxTreeBuilder:
    """Builds ``SyntaxNode`` trees with generated source positions."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._byte = 0
        self._line = 1
        self._column = 0

    def token(self, text: str, *, field: str | None = None) -> SyntaxNode:
        """Create an anonymous token leaf (keyword, operator, punctuation)."""
        return self.leaf(Kind.TOKEN, text, field=field)

    def identifier(self, name: str, *, field: str | None = None) -> SyntaxNode:
        return self.leaf(Kind.IDENTIFIER, name, field=field)

    def leaf(
        self,
        kind: Kind,
        text: str,
        *,
        field: str | None = None,
        grammar_type: str = "",
    ) -> SyntaxNode:
        """Create a leaf of any kind and advance the layout cursor past it."""
        if self._parts and not self._parts[-1].endswith("\n"):
            self._emit(" ")

        start = (self._byte, self._line, self._column)
        self._emit(text)
        span = SourceSpan(start[0], self._byte, start[1], start[2], self._line, self._column)

        return SyntaxNode(kind, span, text=text, field=field, grammar_type=grammar_type or kind.value)

    def node(
        self,
        kind: Kind,
        *children: SyntaxNode,
        field: str | None = None,
        grammar_type: str = "",
    ) -> SyntaxNode:
        """Create an inner node spanning its children."""
        if children:
            first, last = children[0].span, children[-1].span
            span = SourceSpan(
                first.start_byte,
                last.end_byte,
                first.start_line,
                first.start_column,
                last.end_line,
                last.end_column,
            )
        else:
            span = SourceSpan(self._byte, self._byte, self._line, self._column, self._line, self._column)

        return SyntaxNode(kind, span, children, field=field, grammar_type=grammar_type)

    def newline(self) -> None:
        """Move the layout cursor to the start of the next line."""
        self._emit("\n")

    def build(
        self,
        root: SyntaxNode,
        *,
        language: str = "csharp",
        file_path: str = "<built>",
    ) -> SyntaxTree:
        """Wrap a root node into a tree carrying the generated source text."""
        return SyntaxTree(root=root, language=language, source="".join(self._parts), file_path=file_path)

    def _emit(self, text: str) -> None:
        self._parts.append(text)
        self._byte += len(text.encode("utf-8"))
        for char in text:
            if char == "\n":
                self._line += 1
                self._column = 0
            else:
                self._column += 1
