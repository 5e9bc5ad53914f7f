"""Syntax kinds for C# trees.

This module defines the closed set of construct tags the analysis layer
matches on. Front ends map their own node types onto these tags; anything
they cannot map becomes ``Kind.OTHER``.
"""

from enum import Enum


class Kind(str, Enum):
    """Enumeration of syntax node kinds."""

    # Auxiliary text
    SINGLE_LINE_COMMENT = "single_line_comment"
    MULTI_LINE_COMMENT = "multi_line_comment"
    SINGLE_LINE_DOC_COMMENT = "single_line_doc_comment"
    MULTI_LINE_DOC_COMMENT = "multi_line_doc_comment"

    # Declarations
    COMPILATION_UNIT = "compilation_unit"
    NAMESPACE = "namespace"
    FILE_SCOPED_NAMESPACE = "file_scoped_namespace"
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    RECORD = "record"
    ENUM = "enum"
    DELEGATE = "delegate"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    DESTRUCTOR = "destructor"
    OPERATOR = "operator"
    CONVERSION_OPERATOR = "conversion_operator"
    PROPERTY = "property"
    INDEXER = "indexer"
    EVENT = "event"
    EVENT_FIELD = "event_field"
    FIELD = "field"
    ACCESSOR = "accessor"
    ENUM_MEMBER = "enum_member"
    GLOBAL_STATEMENT = "global_statement"

    # Structural wrappers
    DECLARATION_LIST = "declaration_list"
    ACCESSOR_LIST = "accessor_list"
    ARROW_EXPRESSION_CLAUSE = "arrow_expression_clause"
    PARAMETER_LIST = "parameter_list"
    MODIFIER = "modifier"
    VARIABLE_DECLARATOR = "variable_declarator"
    SWITCH_SECTION = "switch_section"
    CASE_LABEL = "case_label"
    CASE_PATTERN_LABEL = "case_pattern_label"
    DEFAULT_LABEL = "default_label"
    ELSE_CLAUSE = "else_clause"
    CATCH = "catch"
    FINALLY = "finally"

    # Statements
    BLOCK = "block"
    IF = "if"
    SWITCH = "switch"
    WHILE = "while"
    DO = "do"
    FOR = "for"
    FOREACH = "foreach"
    TRY = "try"
    GOTO = "goto"
    LABELED = "labeled"
    RETURN = "return"
    BREAK = "break"
    CONTINUE = "continue"
    THROW = "throw"
    YIELD = "yield"
    USING = "using"
    LOCK = "lock"
    CHECKED = "checked"
    UNSAFE = "unsafe"
    FIXED = "fixed"
    EMPTY = "empty"
    EXPRESSION_STATEMENT = "expression_statement"
    LOCAL_DECLARATION = "local_declaration"
    LOCAL_FUNCTION = "local_function"

    # Expressions
    LOGICAL_AND = "logical_and"
    LOGICAL_OR = "logical_or"
    COALESCE = "coalesce"
    BINARY = "binary"
    CONDITIONAL = "conditional"
    CONDITIONAL_ACCESS = "conditional_access"
    INVOCATION = "invocation"
    IDENTIFIER = "identifier"
    MEMBER_ACCESS = "member_access"
    PARENTHESIZED = "parenthesized"
    LAMBDA = "lambda"
    ANONYMOUS_METHOD = "anonymous_method"

    # Leaves and fallbacks
    TOKEN = "token"
    ERROR = "error"
    OTHER = "other"
