"""Unit tests for the C# front end.

This module tests the parser models, the TreeSitterParser implementation
and the normalization of tree-sitter trees into SyntaxNode trees.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

# Check if tree-sitter dependencies are available
try:
    import tree_sitter
    import tree_sitter_c_sharp

    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

# Skip marker for tests requiring tree-sitter
requires_tree_sitter = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE, reason="tree-sitter-c-sharp not installed"
)

from sharpmetrics.parser.base import BaseParser, ParserError
from sharpmetrics.parser.models import ParseResult, SyntaxErrorInfo
from sharpmetrics.parser.tree_sitter import TreeSitterParser
from sharpmetrics.syntax import Kind, SyntaxTreeBuilder

# =============================================================================
# Model Tests
# =============================================================================


class TestSyntaxErrorInfo:
    """Tests for SyntaxErrorInfo."""

    def test_str_for_error(self):
        assert str(SyntaxErrorInfo(line=3, column=7)) == "Syntax error at line 3, column 7"

    def test_str_for_missing_token(self):
        info = SyntaxErrorInfo(line=1, column=2, missing=True)
        assert str(info) == "Missing token at line 1, column 2"

    def test_positions_are_one_indexed(self):
        with pytest.raises(ValidationError):
            SyntaxErrorInfo(line=0, column=1)


class TestParseResult:
    """Tests for ParseResult."""

    def test_carries_tree(self, builder: SyntaxTreeBuilder):
        tree = builder.build(builder.node(Kind.COMPILATION_UNIT))
        result = ParseResult(tree=tree, file_path="a.cs", language="csharp")

        assert result.tree is tree
        assert result.success is True
        assert result.parse_errors == []

    def test_rejects_non_tree(self):
        with pytest.raises(ValidationError):
            ParseResult(tree="class A {}", file_path="a.cs", language="csharp")


class TestParserError:
    """Tests for ParserError."""

    def test_message_only(self):
        error = ParserError("Unsupported language: cobol")
        assert str(error) == "Unsupported language: cobol"
        assert error.file_path is None

    def test_message_with_details(self):
        error = ParserError("Bad input", file_path="a.cs", line=2, column=5)
        assert str(error) == "Bad input (file=a.cs, line=2, column=5)"
        assert error.line == 2
        assert error.column == 5


# =============================================================================
# Language Detection Tests
# =============================================================================


class TestDetectLanguage:
    """Tests for BaseParser.detect_language."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("Program.cs", "csharp"),
            ("script.CSX", "csharp"),
            (Path("src/Module.vb"), None),
            ("main.py", None),
            ("Program.java", None),
            ("README.md", None),
            ("Makefile", None),
        ],
    )
    def test_detect_language(self, path, expected):
        assert BaseParser.detect_language(path) == expected


# =============================================================================
# TreeSitterParser Tests
# =============================================================================


class TestTreeSitterParser:
    """Tests for the TreeSitterParser class."""

    @pytest.fixture
    def parser(self) -> TreeSitterParser:
        """Create a TreeSitterParser instance."""
        return TreeSitterParser()

    # -------------------------------------------------------------------------
    # parse_source Tests
    # -------------------------------------------------------------------------

    @requires_tree_sitter
    @pytest.mark.asyncio
    async def test_parse_source_simple(self, parser: TreeSitterParser, straight_line_code: str):
        """Test parse_source with a simple class."""
        result = await parser.parse_source(straight_line_code, language="csharp")

        assert result.success is True
        assert result.language == "csharp"
        assert result.tree.root.kind is Kind.COMPILATION_UNIT
        assert result.tree.source == straight_line_code

    @requires_tree_sitter
    @pytest.mark.asyncio
    async def test_parse_source_infers_language_from_path(self, parser: TreeSitterParser):
        """Test that language is inferred from file path."""
        result = await parser.parse_source("class A { }", file_path="/virtual/A.cs")

        assert result.language == "csharp"
        assert result.file_path == "/virtual/A.cs"
        assert result.tree.file_path == "/virtual/A.cs"

    @pytest.mark.asyncio
    async def test_parse_source_requires_language(self, parser: TreeSitterParser):
        """Test that language is required when not inferrable."""
        with pytest.raises(ValueError, match="Language must be specified"):
            await parser.parse_source("class A { }")

    @pytest.mark.asyncio
    async def test_parse_source_unsupported_language(self, parser: TreeSitterParser):
        """Test parsing with unsupported language."""
        with pytest.raises(ParserError, match="Unsupported language"):
            await parser.parse_source("fn main() {}", language="rust")

    @requires_tree_sitter
    @pytest.mark.asyncio
    async def test_parse_source_with_syntax_errors(
        self, parser: TreeSitterParser, syntax_error_code: str
    ):
        """Syntax errors are reported but a tree is still produced."""
        result = await parser.parse_source(syntax_error_code, language="csharp")

        assert result.success is False
        assert result.parse_errors
        assert result.tree.root.kind is Kind.COMPILATION_UNIT

    # -------------------------------------------------------------------------
    # parse_file Tests
    # -------------------------------------------------------------------------

    @requires_tree_sitter
    @pytest.mark.asyncio
    async def test_parse_file_success(
        self, parser: TreeSitterParser, temp_source_file, straight_line_code: str
    ):
        """Test parse_file with a real file."""
        path = temp_source_file(straight_line_code)

        result = await parser.parse_file(path)

        assert result.success is True
        assert result.file_path == str(path.resolve())

    @pytest.mark.asyncio
    async def test_parse_file_not_found(self, parser: TreeSitterParser):
        """Test parse_file with non-existent file."""
        with pytest.raises(FileNotFoundError):
            await parser.parse_file("/non/existent/File.cs")

    @pytest.mark.asyncio
    async def test_parse_file_directory(self, parser: TreeSitterParser, tmp_path: Path):
        """Test parse_file on a directory."""
        with pytest.raises(ParserError, match="Path is not a file"):
            await parser.parse_file(tmp_path)

    @pytest.mark.asyncio
    async def test_parse_file_unknown_extension(self, parser: TreeSitterParser, temp_source_file):
        """Test parse_file with unknown file extension."""
        path = temp_source_file("class A { }", suffix=".xyz")

        with pytest.raises(ParserError, match="Cannot detect language"):
            await parser.parse_file(path)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("suffix", [".vb", ".py", ".rs"])
    async def test_parse_file_non_csharp_suffix(self, parser: TreeSitterParser, temp_source_file, suffix: str):
        """Only C# suffixes are mapped to a language."""
        path = temp_source_file("Module M\nEnd Module\n", suffix=suffix)

        with pytest.raises(ParserError, match="Cannot detect language"):
            await parser.parse_file(path)

    # -------------------------------------------------------------------------
    # Misc
    # -------------------------------------------------------------------------

    @requires_tree_sitter
    def test_supported_languages(self, parser: TreeSitterParser):
        assert parser.get_supported_languages() == ["csharp"]
        assert parser.supports_language("CSharp")

    @requires_tree_sitter
    def test_debug_ast(self, parser: TreeSitterParser):
        output = parser.debug_ast("class A { }")

        assert output.startswith("compilation_unit (compilation_unit) [1:0]")
        assert "class (class_declaration)" in output
        assert "= 'A'" in output

    @requires_tree_sitter
    def test_parse_tree_rejects_unknown_language(self, parser: TreeSitterParser):
        with pytest.raises(ParserError):
            parser.parse_tree("class A { }", language="cobol")


# =============================================================================
# Normalization Tests
# =============================================================================


def _kinds(tree) -> list[Kind]:
    return [node.kind for node in tree.root.walk()]


@requires_tree_sitter
class TestCSharpNormalizer:
    """Tests for the tree-sitter to SyntaxNode conversion."""

    def test_spans_are_one_indexed_lines(self, tree_sitter_parser):
        tree = tree_sitter_parser.parse_tree("class A\n{\n}\n")
        cls = tree.root.children[0]

        assert cls.kind is Kind.CLASS
        assert cls.span.start_line == 1
        assert cls.span.start_column == 0
        assert cls.span.end_line == 3

    def test_anonymous_nodes_become_tokens(self, tree_sitter_parser):
        tree = tree_sitter_parser.parse_tree("class A { }")
        cls = tree.root.children[0]

        keyword = cls.find_token("class")
        assert keyword is not None
        assert keyword.is_leaf
        assert cls.child_by_field("name").text == "A"

    @pytest.mark.parametrize(
        ("operator", "kind"),
        [
            ("&&", Kind.LOGICAL_AND),
            ("||", Kind.LOGICAL_OR),
            ("??", Kind.COALESCE),
            ("+", Kind.BINARY),
        ],
    )
    def test_binary_expressions_split_by_operator(self, tree_sitter_parser, operator: str, kind: Kind):
        tree = tree_sitter_parser.parse_tree(f"class C {{ object F = a {operator} b; }}")

        assert kind in _kinds(tree)

    def test_else_clause_is_wrapped(self, tree_sitter_parser, if_else_chain_code: str):
        tree = tree_sitter_parser.parse_tree(if_else_chain_code)
        clauses = [n for n in tree.root.walk() if n.kind is Kind.ELSE_CLAUSE]

        assert len(clauses) == 2
        for clause in clauses:
            assert clause.parent.kind is Kind.IF
            assert clause.children[0].text == "else"
        assert clauses[0].children[1].kind is Kind.IF

    @pytest.mark.parametrize(
        ("comment", "kind"),
        [
            ("// plain", Kind.SINGLE_LINE_COMMENT),
            ("/// <summary/>", Kind.SINGLE_LINE_DOC_COMMENT),
            ("/* block */", Kind.MULTI_LINE_COMMENT),
            ("/** doc */", Kind.MULTI_LINE_DOC_COMMENT),
            ("/**/", Kind.MULTI_LINE_COMMENT),
        ],
    )
    def test_comment_kinds(self, tree_sitter_parser, comment: str, kind: Kind):
        tree = tree_sitter_parser.parse_tree(f"{comment}\nclass A {{ }}\n")

        assert tree.root.children[0].kind is kind
        assert tree.root.children[0].text == comment

    def test_switch_labels(self, tree_sitter_parser):
        code = """class C
{
    void M(int x)
    {
        switch (x)
        {
            case 1:
                break;
            default:
                break;
        }
    }
}
"""
        kinds = _kinds(tree_sitter_parser.parse_tree(code))

        assert Kind.SWITCH in kinds
        assert kinds.count(Kind.CASE_LABEL) == 1
        assert kinds.count(Kind.DEFAULT_LABEL) == 1

    def test_unknown_grammar_types_map_to_other(self, tree_sitter_parser):
        tree = tree_sitter_parser.parse_tree("class C { int F = 1; }")

        literal = next(n for n in tree.root.walk() if n.grammar_type == "integer_literal")
        assert literal.kind is Kind.OTHER
        assert literal.text == "1"

    def test_deep_trees_are_converted(self, tree_sitter_parser):
        # "+" is left-associative: the chain nests one binary node per operand
        expression = " + ".join(f"a{i}" for i in range(2500))
        code = f"class C {{ string F = {expression}; }}"

        first = tree_sitter_parser.parse_tree(code)
        second = tree_sitter_parser.parse_tree(code)

        assert _kinds(first).count(Kind.BINARY) == 2499
        assert first.root == second.root
        assert first.root.last_token().text == "}"
