"""Categorical predicates over syntax nodes.

Every predicate here is pure and total: it looks at node kinds, children
and parents only, and answers ``False`` for kinds it does not recognise.
"""

from ..syntax import Kind, SyntaxNode

COMMENT_KINDS: frozenset[Kind] = frozenset(
    {
        Kind.SINGLE_LINE_COMMENT,
        Kind.MULTI_LINE_COMMENT,
        Kind.SINGLE_LINE_DOC_COMMENT,
        Kind.MULTI_LINE_DOC_COMMENT,
    }
)

DOC_COMMENT_KINDS: frozenset[Kind] = frozenset(
    {Kind.SINGLE_LINE_DOC_COMMENT, Kind.MULTI_LINE_DOC_COMMENT}
)

CLASS_KINDS: frozenset[Kind] = frozenset({Kind.CLASS, Kind.STRUCT, Kind.INTERFACE})

# Blocks are structural: counting them would count their statements twice.
STATEMENT_KINDS: frozenset[Kind] = frozenset(
    {
        Kind.IF,
        Kind.SWITCH,
        Kind.WHILE,
        Kind.DO,
        Kind.FOR,
        Kind.FOREACH,
        Kind.TRY,
        Kind.GOTO,
        Kind.LABELED,
        Kind.RETURN,
        Kind.BREAK,
        Kind.CONTINUE,
        Kind.THROW,
        Kind.YIELD,
        Kind.USING,
        Kind.LOCK,
        Kind.CHECKED,
        Kind.UNSAFE,
        Kind.FIXED,
        Kind.EMPTY,
        Kind.EXPRESSION_STATEMENT,
        Kind.LOCAL_DECLARATION,
        Kind.LOCAL_FUNCTION,
    }
)

FUNCTION_KINDS: frozenset[Kind] = frozenset(
    {Kind.CONSTRUCTOR, Kind.DESTRUCTOR, Kind.METHOD, Kind.OPERATOR}
)

PROPERTY_KINDS: frozenset[Kind] = frozenset({Kind.PROPERTY, Kind.INDEXER, Kind.EVENT})

COMPLEXITY_INCREASING_KINDS: frozenset[Kind] = frozenset(
    {
        Kind.IF,
        Kind.COALESCE,
        Kind.CONDITIONAL_ACCESS,
        Kind.CONDITIONAL,
        Kind.SWITCH,
        Kind.LABELED,
        Kind.WHILE,
        Kind.DO,
        Kind.FOR,
        Kind.FOREACH,
        Kind.LOGICAL_AND,
        Kind.LOGICAL_OR,
        Kind.CASE_LABEL,
    }
)

MEMBER_DECLARATION_KINDS: frozenset[Kind] = frozenset(
    {
        Kind.NAMESPACE,
        Kind.FILE_SCOPED_NAMESPACE,
        Kind.CLASS,
        Kind.STRUCT,
        Kind.INTERFACE,
        Kind.RECORD,
        Kind.ENUM,
        Kind.DELEGATE,
        Kind.METHOD,
        Kind.CONSTRUCTOR,
        Kind.DESTRUCTOR,
        Kind.OPERATOR,
        Kind.CONVERSION_OPERATOR,
        Kind.PROPERTY,
        Kind.INDEXER,
        Kind.EVENT,
        Kind.EVENT_FIELD,
        Kind.FIELD,
        Kind.ENUM_MEMBER,
        Kind.GLOBAL_STATEMENT,
    }
)

NAMESPACE_KINDS: frozenset[Kind] = frozenset({Kind.NAMESPACE, Kind.FILE_SCOPED_NAMESPACE})


def is_comment(node: SyntaxNode) -> bool:
    """True for single-line, multi-line and documentation comments."""
    return node.kind in COMMENT_KINDS


def is_documentation_comment(node: SyntaxNode) -> bool:
    return node.kind in DOC_COMMENT_KINDS


def is_class_like(node: SyntaxNode) -> bool:
    """True for class, struct and interface declarations."""
    return node.kind in CLASS_KINDS


def is_statement(node: SyntaxNode) -> bool:
    """True for statements, compound blocks excluded."""
    return node.kind in STATEMENT_KINDS


def is_function_like(node: SyntaxNode) -> bool:
    """Check whether a node declares a function body.

    Covers expression-bodied properties and methods; constructors,
    destructors, methods and operators with a block body (abstract and
    interface signatures have none); accessors with a block body; and
    auto-implemented accessors of non-abstract properties declared outside
    interfaces.

    Args:
        node: The node to check.

    Returns:
        True if the node is function-like.
    """
    kind = node.kind

    if kind in (Kind.PROPERTY, Kind.METHOD) and node.has_child_of_kind(Kind.ARROW_EXPRESSION_CLAUSE):
        return True

    if kind in FUNCTION_KINDS and node.has_child_of_kind(Kind.BLOCK):
        return True

    if kind is Kind.ACCESSOR:
        if node.has_child_of_kind(Kind.BLOCK):
            return True

        accessor_list = node.parent
        prop = accessor_list.parent if accessor_list is not None else None
        if prop is None or prop.kind not in PROPERTY_KINDS:
            return False

        if has_modifier(prop, "abstract"):
            return False

        container = enclosing_declaration(prop)
        return container is None or container.kind is not Kind.INTERFACE

    return False


def is_complexity_increasing(node: SyntaxNode) -> bool:
    """True for the constructs counted by the flat complexity metric."""
    return node.kind in COMPLEXITY_INCREASING_KINDS


def is_return_but_not_last(node: SyntaxNode) -> bool:
    """True for a return statement that is not the last one of its function.

    A return is last when the token right after it belongs to a block that
    is itself the body of a function-like declaration.
    """
    return node.kind is Kind.RETURN and not _is_last_statement(node)


def _is_last_statement(node: SyntaxNode) -> bool:
    next_token = node.last_token().next_token()
    if next_token is None:
        return False

    block = next_token.parent
    if block is None or block.kind is not Kind.BLOCK or block.parent is None:
        return False

    return is_function_like(block.parent)


def is_member_declaration(node: SyntaxNode) -> bool:
    return node.kind in MEMBER_DECLARATION_KINDS


def is_namespace(node: SyntaxNode) -> bool:
    return node.kind in NAMESPACE_KINDS


def is_public(node: SyntaxNode) -> bool:
    """True if the declaration carries a ``public`` modifier."""
    return has_modifier(node, "public")


def modifiers(node: SyntaxNode) -> list[str]:
    """Get the modifier keywords attached directly to a declaration."""
    keywords: list[str] = []
    for child in node.children:
        if child.kind is not Kind.MODIFIER:
            continue
        if child.text is not None:
            keywords.append(child.text)
        else:
            keywords.extend(leaf.text for leaf in child.leaves() if leaf.text)
    return keywords


def has_modifier(node: SyntaxNode, keyword: str) -> bool:
    return keyword in modifiers(node)


def member_declarations(node: SyntaxNode) -> list[SyntaxNode]:
    """Get the member declarations directly owned by a node.

    Members inside a declaration list wrapper count as owned by the node
    that holds the list.
    """
    members: list[SyntaxNode] = []
    for child in node.children:
        if is_member_declaration(child):
            members.append(child)
        elif child.kind is Kind.DECLARATION_LIST:
            members.extend(c for c in child.children if is_member_declaration(c))
    return members


def enclosing_declaration(node: SyntaxNode) -> SyntaxNode | None:
    """Get the declaration that owns a member, skipping declaration lists."""
    parent = node.parent
    if parent is not None and parent.kind is Kind.DECLARATION_LIST:
        parent = parent.parent
    return parent
