"""Conversion of tree-sitter C# trees into ``SyntaxNode`` trees.

The tree-sitter grammar and the analysis layer disagree on a few shapes:

- ``binary_expression`` covers every operator; the analysis layer wants
  logical-and, logical-or and coalesce as their own kinds.
- ``if_statement`` holds ``else`` and the alternative directly; they are
  wrapped into an ``ELSE_CLAUSE`` node here.
- Recent grammar versions put ``case ... :`` labels inline in a
  ``switch_section``; they are wrapped into label nodes here.
- All comments share one node type; the variant is read from the text.

Anonymous nodes become ``Kind.TOKEN`` leaves so that keyword and operator
positions stay available for reporting.
"""

from typing import TYPE_CHECKING

import structlog

from ..syntax import Kind, SourceSpan, SyntaxNode

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

logger = structlog.get_logger(__name__)

GRAMMAR_KINDS: dict[str, Kind] = {
    # Declarations
    "compilation_unit": Kind.COMPILATION_UNIT,
    "namespace_declaration": Kind.NAMESPACE,
    "file_scoped_namespace_declaration": Kind.FILE_SCOPED_NAMESPACE,
    "class_declaration": Kind.CLASS,
    "struct_declaration": Kind.STRUCT,
    "interface_declaration": Kind.INTERFACE,
    "record_declaration": Kind.RECORD,
    "record_struct_declaration": Kind.RECORD,
    "enum_declaration": Kind.ENUM,
    "delegate_declaration": Kind.DELEGATE,
    "method_declaration": Kind.METHOD,
    "constructor_declaration": Kind.CONSTRUCTOR,
    "destructor_declaration": Kind.DESTRUCTOR,
    "operator_declaration": Kind.OPERATOR,
    "conversion_operator_declaration": Kind.CONVERSION_OPERATOR,
    "property_declaration": Kind.PROPERTY,
    "indexer_declaration": Kind.INDEXER,
    "event_declaration": Kind.EVENT,
    "event_field_declaration": Kind.EVENT_FIELD,
    "field_declaration": Kind.FIELD,
    "accessor_declaration": Kind.ACCESSOR,
    "enum_member_declaration": Kind.ENUM_MEMBER,
    "global_statement": Kind.GLOBAL_STATEMENT,
    # Structural wrappers
    "declaration_list": Kind.DECLARATION_LIST,
    "enum_member_declaration_list": Kind.DECLARATION_LIST,
    "accessor_list": Kind.ACCESSOR_LIST,
    "arrow_expression_clause": Kind.ARROW_EXPRESSION_CLAUSE,
    "parameter_list": Kind.PARAMETER_LIST,
    "modifier": Kind.MODIFIER,
    "variable_declarator": Kind.VARIABLE_DECLARATOR,
    "switch_section": Kind.SWITCH_SECTION,
    "case_switch_label": Kind.CASE_LABEL,
    "case_pattern_switch_label": Kind.CASE_PATTERN_LABEL,
    "default_switch_label": Kind.DEFAULT_LABEL,
    "else_clause": Kind.ELSE_CLAUSE,
    "catch_clause": Kind.CATCH,
    "finally_clause": Kind.FINALLY,
    # Statements
    "block": Kind.BLOCK,
    "if_statement": Kind.IF,
    "switch_statement": Kind.SWITCH,
    "while_statement": Kind.WHILE,
    "do_statement": Kind.DO,
    "for_statement": Kind.FOR,
    "for_each_statement": Kind.FOREACH,
    "foreach_statement": Kind.FOREACH,
    "try_statement": Kind.TRY,
    "goto_statement": Kind.GOTO,
    "labeled_statement": Kind.LABELED,
    "return_statement": Kind.RETURN,
    "break_statement": Kind.BREAK,
    "continue_statement": Kind.CONTINUE,
    "throw_statement": Kind.THROW,
    "yield_statement": Kind.YIELD,
    "using_statement": Kind.USING,
    "lock_statement": Kind.LOCK,
    "checked_statement": Kind.CHECKED,
    "unsafe_statement": Kind.UNSAFE,
    "fixed_statement": Kind.FIXED,
    "empty_statement": Kind.EMPTY,
    "expression_statement": Kind.EXPRESSION_STATEMENT,
    "local_declaration_statement": Kind.LOCAL_DECLARATION,
    "local_function_statement": Kind.LOCAL_FUNCTION,
    # Expressions
    "conditional_expression": Kind.CONDITIONAL,
    "conditional_access_expression": Kind.CONDITIONAL_ACCESS,
    "invocation_expression": Kind.INVOCATION,
    "identifier": Kind.IDENTIFIER,
    "member_access_expression": Kind.MEMBER_ACCESS,
    "parenthesized_expression": Kind.PARENTHESIZED,
    "lambda_expression": Kind.LAMBDA,
    "anonymous_method_expression": Kind.ANONYMOUS_METHOD,
    "ERROR": Kind.ERROR,
}

BINARY_OPERATOR_KINDS: dict[str, Kind] = {
    "&&": Kind.LOGICAL_AND,
    "||": Kind.LOGICAL_OR,
    "??": Kind.COALESCE,
}

# Grammar types that turn an inline ``case`` label into a pattern label.
PATTERN_TYPES: frozenset[str] = frozenset(
    {
        "when_clause",
        "declaration_pattern",
        "recursive_pattern",
        "var_pattern",
        "type_pattern",
        "relational_pattern",
        "and_pattern",
        "or_pattern",
        "negated_pattern",
        "parenthesized_pattern",
        "list_pattern",
        "discard",
    }
)

_LABEL_KINDS = (Kind.CASE_LABEL, Kind.CASE_PATTERN_LABEL, Kind.DEFAULT_LABEL)


class CSharpNormalizer:
    """Converts a tree-sitter C# tree into a ``SyntaxNode`` tree."""

    language: str = "csharp"

    def __init__(self, source_bytes: bytes) -> None:
        """Initialize the normalizer.

        Args:
            source_bytes: The UTF-8 encoded source the tree was parsed from.
        """
        self._source = source_bytes

    def normalize(self, tree: "Tree") -> SyntaxNode:
        """Convert a whole tree-sitter tree.

        Args:
            tree: The tree-sitter parse tree.

        Returns:
            The root ``SyntaxNode``.
        """
        cursor = tree.walk()
        # One frame per open ancestor of the cursor: (node, field, converted children)
        frames: list[tuple["Node", str | None, list[SyntaxNode]]] = [(cursor.node, None, [])]

        while True:
            if cursor.goto_first_child():
                frames.append((cursor.node, cursor.field_name, []))
                continue

            while True:
                node, field, children = frames.pop()
                converted = self._convert(node, field, children)
                if not frames:
                    return converted
                frames[-1][2].append(converted)

                if cursor.goto_next_sibling():
                    frames.append((cursor.node, cursor.field_name, []))
                    break
                cursor.goto_parent()

    def _convert(self, node: "Node", field: str | None, children: list[SyntaxNode]) -> SyntaxNode:
        kind = self._kind_of(node, children)
        span = _span_of(node)

        if not children:
            return SyntaxNode(
                kind,
                span,
                text=self._text_of(node),
                field=field,
                grammar_type=node.type,
            )

        if kind is Kind.IF:
            children = _wrap_else_clause(children)
        elif kind is Kind.SWITCH_SECTION:
            children = _wrap_case_labels(children)

        return SyntaxNode(kind, span, tuple(children), field=field, grammar_type=node.type)

    def _kind_of(self, node: "Node", children: list[SyntaxNode]) -> Kind:
        if not node.is_named:
            return Kind.TOKEN

        if node.type == "comment":
            return _comment_kind(self._text_of(node))

        if node.type == "binary_expression":
            operator = next((c for c in children if c.field == "operator"), None)
            if operator is not None and operator.text in BINARY_OPERATOR_KINDS:
                return BINARY_OPERATOR_KINDS[operator.text]
            return Kind.BINARY

        return GRAMMAR_KINDS.get(node.type, Kind.OTHER)

    def _text_of(self, node: "Node") -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _span_of(node: "Node") -> SourceSpan:
    # tree-sitter rows are 0-indexed; spans use 1-indexed lines
    return SourceSpan(
        node.start_byte,
        node.end_byte,
        node.start_point[0] + 1,
        node.start_point[1],
        node.end_point[0] + 1,
        node.end_point[1],
    )


def _comment_kind(text: str) -> Kind:
    if text.startswith("///"):
        return Kind.SINGLE_LINE_DOC_COMMENT
    if text.startswith("/**") and text != "/**/":
        return Kind.MULTI_LINE_DOC_COMMENT
    if text.startswith("/*"):
        return Kind.MULTI_LINE_COMMENT
    return Kind.SINGLE_LINE_COMMENT


def _merge_span(first: SyntaxNode, last: SyntaxNode) -> SourceSpan:
    return SourceSpan(
        first.span.start_byte,
        last.span.end_byte,
        first.span.start_line,
        first.span.start_column,
        last.span.end_line,
        last.span.end_column,
    )


def _wrap_else_clause(children: list[SyntaxNode]) -> list[SyntaxNode]:
    """Group ``else`` and the alternative statement of an if statement."""
    for index, child in enumerate(children):
        if child.is_token and child.text == "else":
            clause_children = tuple(children[index:])
            clause = SyntaxNode(
                Kind.ELSE_CLAUSE,
                _merge_span(clause_children[0], clause_children[-1]),
                clause_children,
                field="else",
                grammar_type="else_clause",
            )
            return [*children[:index], clause]
    return children


def _wrap_case_labels(children: list[SyntaxNode]) -> list[SyntaxNode]:
    """Group inline ``case ... :`` and ``default :`` runs into label nodes."""
    if any(c.kind in _LABEL_KINDS for c in children):
        return children

    result: list[SyntaxNode] = []
    pending: list[SyntaxNode] = []

    for child in children:
        if not pending and child.is_token and child.text in ("case", "default"):
            pending.append(child)
            continue

        if pending:
            pending.append(child)
            if child.is_token and child.text == ":":
                result.append(_label_node(pending))
                pending = []
            continue

        result.append(child)

    if pending:
        logger.debug("Unterminated switch label", tokens=len(pending))
        result.extend(pending)

    return result


def _label_node(parts: list[SyntaxNode]) -> SyntaxNode:
    if parts[0].text == "default":
        kind = Kind.DEFAULT_LABEL
    elif any(p.grammar_type in PATTERN_TYPES for p in parts):
        kind = Kind.CASE_PATTERN_LABEL
    else:
        kind = Kind.CASE_LABEL

    return SyntaxNode(
        kind,
        _merge_span(parts[0], parts[-1]),
        tuple(parts),
        grammar_type=kind.value,
    )
