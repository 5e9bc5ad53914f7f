"""Cognitive Complexity walker.

The walker scores a declaration subtree in one depth-first, pre-order pass.
Structural constructs add ``nesting + 1`` and raise the nesting level for
their children; ``else`` adds a flat +1; runs of the same logical operator
count once; direct recursion adds ``nesting + 1``; lambdas only raise the
nesting level.

Dispatch goes through a read-only table mapping each ``Kind`` to a handler
``(node, state) -> bool``. A handler records its increments and returns True
when the node's children sit one nesting level deeper. Kinds without a
handler just have their children visited. The traversal runs on an explicit
stack, so deep trees (long operator chains in generated code) do not hit the
interpreter recursion limit.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import structlog

from ..syntax import Kind, SyntaxNode
from .errors import InvariantViolationError
from .models import CognitiveComplexityResult, ComplexityIncrement

logger = structlog.get_logger(__name__)

LOGICAL_KINDS: frozenset[Kind] = frozenset({Kind.LOGICAL_AND, Kind.LOGICAL_OR})

LOGICAL_OPERATORS: dict[Kind, str] = {
    Kind.LOGICAL_AND: "&&",
    Kind.LOGICAL_OR: "||",
}


@dataclass
class WalkerState:
    """Mutable state of a single walk.

    Attributes:
        function_name: Name of the enclosing method, for recursion detection.
        function_name_from_caller: True when ``function_name`` was supplied
            by the caller; method declarations then leave it alone.
        nesting: Current nesting level.
        complexity: Score accumulated so far.
        increments: Increment trace in traversal order.
        ignored_logical_nodes: Logical operator nodes already counted as part
            of a run.
    """

    function_name: str | None = None
    function_name_from_caller: bool = False
    nesting: int = 0
    complexity: int = 0
    increments: list[ComplexityIncrement] = field(default_factory=list)
    ignored_logical_nodes: set[SyntaxNode] = field(default_factory=set)

    def increase_by_one(self, token: SyntaxNode) -> None:
        self._increase(token, 1)

    def increase_by_nesting_plus_one(self, token: SyntaxNode) -> None:
        self._increase(token, self.nesting + 1)

    def _increase(self, token: SyntaxNode, magnitude: int) -> None:
        self.complexity += magnitude
        self.increments.append(ComplexityIncrement.at(token.span, magnitude))


Handler = Callable[[SyntaxNode, WalkerState], bool]


def _keyword(node: SyntaxNode, text: str) -> SyntaxNode:
    return node.find_token(text) or node.first_token()


def _nesting_construct(keyword: str) -> Handler:
    """Build a handler adding ``nesting + 1`` at ``keyword`` and nesting the children."""

    def handler(node: SyntaxNode, state: WalkerState) -> bool:
        state.increase_by_nesting_plus_one(_keyword(node, keyword))
        return True

    return handler


_visit_nested_if = _nesting_construct("if")


def visit_if(node: SyntaxNode, state: WalkerState) -> bool:
    # ``else if`` is scored by its else clause
    parent = node.parent
    if parent is not None and parent.kind is Kind.ELSE_CLAUSE:
        return False
    return _visit_nested_if(node, state)


def visit_else(node: SyntaxNode, state: WalkerState) -> bool:
    state.increase_by_one(_keyword(node, "else"))
    return False


def visit_goto(node: SyntaxNode, state: WalkerState) -> bool:
    state.increase_by_nesting_plus_one(_keyword(node, "goto"))
    return False


def visit_lambda(node: SyntaxNode, state: WalkerState) -> bool:
    return True


def visit_method(node: SyntaxNode, state: WalkerState) -> bool:
    if not state.function_name_from_caller:
        state.function_name = declaration_name(node)
    return False


def visit_logical(node: SyntaxNode, state: WalkerState) -> bool:
    """Count a run of identical logical operators once.

    In ``a && b && c`` only the innermost ``&&`` (whose left operand is not
    an ``&&``) is counted. A right operand of the same kind continues the run
    and is skipped when it is visited.
    """
    if node in state.ignored_logical_nodes:
        return False

    kind = node.kind
    left, right = operands(node)

    if left is None or strip_parentheses(left).kind is not kind:
        operator = node.child_by_field("operator") or _keyword(node, LOGICAL_OPERATORS[kind])
        state.increase_by_one(operator)

    if right is not None:
        stripped = strip_parentheses(right)
        if stripped.kind is kind:
            state.ignored_logical_nodes.add(stripped)

    return False


def visit_invocation(node: SyntaxNode, state: WalkerState) -> bool:
    callee = node.child_by_field("function")
    if callee is None and node.named_children:
        callee = node.named_children[0]

    if (
        callee is not None
        and callee.kind is Kind.IDENTIFIER
        and state.function_name is not None
        and callee.text == state.function_name
    ):
        state.increase_by_nesting_plus_one(callee)

    return False


HANDLERS: Mapping[Kind, Handler] = MappingProxyType(
    {
        Kind.METHOD: visit_method,
        Kind.IF: visit_if,
        Kind.ELSE_CLAUSE: visit_else,
        Kind.CONDITIONAL: _nesting_construct("?"),
        Kind.SWITCH: _nesting_construct("switch"),
        Kind.FOR: _nesting_construct("for"),
        Kind.WHILE: _nesting_construct("while"),
        Kind.DO: _nesting_construct("do"),
        Kind.FOREACH: _nesting_construct("foreach"),
        Kind.CATCH: _nesting_construct("catch"),
        Kind.GOTO: visit_goto,
        Kind.LOGICAL_AND: visit_logical,
        Kind.LOGICAL_OR: visit_logical,
        Kind.INVOCATION: visit_invocation,
        Kind.LAMBDA: visit_lambda,
    }
)


def operands(node: SyntaxNode) -> tuple[SyntaxNode | None, SyntaxNode | None]:
    """Get the left and right operands of a binary node."""
    left = node.child_by_field("left")
    right = node.child_by_field("right")
    if left is None or right is None:
        named = node.named_children
        if left is None and named:
            left = named[0]
        if right is None and len(named) > 1:
            right = named[-1]
    return left, right


def strip_parentheses(node: SyntaxNode) -> SyntaxNode:
    while node.kind is Kind.PARENTHESIZED and node.named_children:
        node = node.named_children[0]
    return node


def declaration_name(node: SyntaxNode) -> str | None:
    """Get the identifier naming a declaration, if it has one."""
    name = node.child_by_field("name")
    if name is None:
        identifiers = node.children_of_kind(Kind.IDENTIFIER)
        name = identifiers[-1] if identifiers else None
    return name.text if name is not None else None


class CognitiveComplexityWalker:
    """Computes the cognitive complexity of a syntax subtree.

    The walker itself holds no per-walk state, so one instance can score any
    number of subtrees.
    """

    def __init__(self, handlers: Mapping[Kind, Handler] | None = None) -> None:
        """Initialize the walker.

        Args:
            handlers: Replacement handler table. Defaults to ``HANDLERS``.
        """
        self._handlers = HANDLERS if handlers is None else MappingProxyType(dict(handlers))
        self._logger = logger.bind(component="cognitive_complexity_walker")

    @property
    def handlers(self) -> Mapping[Kind, Handler]:
        return self._handlers

    def walk(self, node: SyntaxNode, function_name: str | None = None) -> CognitiveComplexityResult:
        """Score a subtree.

        Args:
            node: Root of the subtree, usually a declaration.
            function_name: Name used to detect recursive calls. When omitted,
                each method declaration in the subtree sets it to its own name.

        Returns:
            Score and increment trace.

        Raises:
            InvariantViolationError: If the nesting level is not back to zero
                at the end of the walk.
        """
        state = WalkerState(
            function_name=function_name,
            function_name_from_caller=function_name is not None,
        )
        self._visit(node, state)

        if state.nesting != 0:
            self._logger.error(
                "Unbalanced nesting after complexity walk",
                nesting=state.nesting,
                kind=node.kind.value,
                span=str(node.span),
            )
            raise InvariantViolationError(state.nesting)

        return CognitiveComplexityResult(score=state.complexity, increments=tuple(state.increments))

    def _visit(self, root: SyntaxNode, state: WalkerState) -> None:
        # (node, leaving): a leaving frame closes the nesting level its node opened
        stack: list[tuple[SyntaxNode, bool]] = [(root, False)]
        while stack:
            node, leaving = stack.pop()
            if leaving:
                state.nesting -= 1
                continue

            handler = self._handlers.get(node.kind)
            if handler is not None and handler(node, state):
                state.nesting += 1
                stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))


def compute_complexity(node: SyntaxNode, function_name: str | None = None) -> CognitiveComplexityResult:
    """Compute the cognitive complexity of a subtree with the default handlers."""
    return CognitiveComplexityWalker().walk(node, function_name)
