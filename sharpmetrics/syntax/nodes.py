"""Immutable syntax tree model.

This module defines the tree the analysis layer works on: a tagged node with
ordered children, a parent link and a source span. Trees are produced by a
front end (see ``sharpmetrics.parser``) or by ``SyntaxTreeBuilder`` and are
never mutated afterwards.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

from .kinds import Kind


class SourceSpan(NamedTuple):
    """Location of a node in its source text.

    Attributes:
        start_byte: Byte offset where the node begins.
        end_byte: Byte offset just past the node.
        start_line: Line where the node begins (1-indexed).
        start_column: Column where the node begins (0-indexed).
        end_line: Line where the node ends (1-indexed).
        end_column: Column just past the node (0-indexed).
    """

    start_byte: int
    end_byte: int
    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def __str__(self) -> str:
        return f"{self.start_line}:{self.start_column}-{self.end_line}:{self.end_column}"


class SyntaxNode:
    """A node of an immutable syntax tree.

    Leaves carry their source ``text``; inner nodes carry ``children``.
    ``field`` names the grammar slot the node occupies in its parent
    (``"left"``, ``"body"``, ...), when the front end knows it.

    Equality is structural and ignores the parent link, so two parses of the
    same text produce equal trees. The hash only covers kind and span.
    """

    __slots__ = ("_kind", "_span", "_children", "_text", "_field", "_grammar_type", "_parent")

    def __init__(
        self,
        kind: Kind,
        span: SourceSpan,
        children: tuple["SyntaxNode", ...] = (),
        *,
        text: str | None = None,
        field: str | None = None,
        grammar_type: str = "",
    ) -> None:
        self._kind = kind
        self._span = span
        self._children = tuple(children)
        self._text = text
        self._field = field
        self._grammar_type = grammar_type or kind.value
        self._parent: SyntaxNode | None = None
        for child in self._children:
            child._parent = self

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def span(self) -> SourceSpan:
        return self._span

    @property
    def children(self) -> tuple["SyntaxNode", ...]:
        return self._children

    @property
    def parent(self) -> "SyntaxNode | None":
        return self._parent

    @property
    def text(self) -> str | None:
        return self._text

    @property
    def field(self) -> str | None:
        return self._field

    @property
    def grammar_type(self) -> str:
        return self._grammar_type

    @property
    def is_token(self) -> bool:
        """True for anonymous leaves (keywords, punctuation, operators)."""
        return self._kind is Kind.TOKEN

    @property
    def is_leaf(self) -> bool:
        return not self._children

    @property
    def named_children(self) -> tuple["SyntaxNode", ...]:
        """Children that are not anonymous tokens."""
        return tuple(c for c in self._children if c._kind is not Kind.TOKEN)

    def child_by_field(self, name: str) -> "SyntaxNode | None":
        """Get the first child stored under the given grammar field."""
        for child in self._children:
            if child._field == name:
                return child
        return None

    def children_of_kind(self, *kinds: Kind) -> list["SyntaxNode"]:
        """Get the direct children whose kind is one of ``kinds``."""
        return [c for c in self._children if c._kind in kinds]

    def has_child_of_kind(self, kind: Kind) -> bool:
        return any(c._kind is kind for c in self._children)

    def find_token(self, text: str) -> "SyntaxNode | None":
        """Get the first direct child token with the given text."""
        for child in self._children:
            if child._kind is Kind.TOKEN and child._text == text:
                return child
        return None

    def walk(self) -> Iterator["SyntaxNode"]:
        """Iterate over this node and its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def descendants(self) -> Iterator["SyntaxNode"]:
        """Iterate over the descendants of this node in pre-order."""
        nodes = self.walk()
        next(nodes)
        yield from nodes

    def leaves(self) -> Iterator["SyntaxNode"]:
        """Iterate over the leaves under this node in document order."""
        return (node for node in self.walk() if not node._children)

    def ancestors(self) -> Iterator["SyntaxNode"]:
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def first_token(self) -> "SyntaxNode":
        node = self
        while node._children:
            node = node._children[0]
        return node

    def last_token(self) -> "SyntaxNode":
        node = self
        while node._children:
            node = node._children[-1]
        return node

    def next_token(self) -> "SyntaxNode | None":
        """Get the first leaf that follows this node in document order.

        Returns:
            The following leaf, or None at the end of the tree.
        """
        node = self
        while node._parent is not None:
            siblings = node._parent._children
            index = _index_of(siblings, node)
            if index + 1 < len(siblings):
                return siblings[index + 1].first_token()
            node = node._parent
        return None

    def previous_sibling(self) -> "SyntaxNode | None":
        if self._parent is None:
            return None
        siblings = self._parent._children
        index = _index_of(siblings, self)
        return siblings[index - 1] if index > 0 else None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, SyntaxNode):
            return NotImplemented

        pairs = [(self, other)]
        while pairs:
            left, right = pairs.pop()
            if left is right:
                continue
            if not (
                left._kind is right._kind
                and left._span == right._span
                and left._text == right._text
                and left._field == right._field
                and left._grammar_type == right._grammar_type
                and len(left._children) == len(right._children)
            ):
                return False
            pairs.extend(zip(left._children, right._children))
        return True

    def __hash__(self) -> int:
        return hash((self._kind, self._span))

    def __repr__(self) -> str:
        if self._text is not None:
            return f"SyntaxNode({self._kind.value}, {self._text!r} @ {self._span})"
        return f"SyntaxNode({self._kind.value} @ {self._span})"


def _index_of(siblings: tuple[SyntaxNode, ...], node: SyntaxNode) -> int:
    # Identity lookup; structurally equal siblings must not be confused.
    for index, sibling in enumerate(siblings):
        if sibling is node:
            return index
    raise ValueError(f"{node!r} is not a child of its parent")


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed source unit.

    Attributes:
        root: Root node (a compilation unit for C# sources).
        language: Language identifier of the grammar that produced the tree.
        source: The source text the tree was built from.
        file_path: Path of the source file, or a placeholder.
    """

    root: SyntaxNode
    language: str
    source: str
    file_path: str = "<string>"

    @property
    def line_count(self) -> int:
        """Number of lines of the source text."""
        return self.source.count("\n") + 1
