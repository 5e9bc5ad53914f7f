"""tree-sitter front end for C#.

Source text is parsed with the ``tree-sitter-c-sharp`` grammar and handed to
``CSharpNormalizer``, which produces the immutable ``SyntaxTree`` consumed by
the analysis layer. tree-sitter always yields a tree, even for broken input;
syntax errors are reported next to it in ``ParseResult``.
"""

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from ..syntax import SyntaxNode, SyntaxTree
from .base import BaseParser, ParserError
from .models import ParseResult, SyntaxErrorInfo
from .normalizer import CSharpNormalizer

if TYPE_CHECKING:
    from tree_sitter import Node, Parser, Tree

logger = structlog.get_logger(__name__)


class TreeSitterParser(BaseParser):
    """C# parser backed by tree-sitter.

    The grammar is loaded on first use, so constructing a parser is cheap
    and works without the grammar wheel installed. Each instance owns its
    tree-sitter parser and must not be shared between threads.

    Attributes:
        supported_languages: Languages whose grammar loaded.
    """

    supported_languages: set[str] = {"csharp"}

    def __init__(self) -> None:
        self._loaded = False
        self._parsers: dict[str, Parser] = {}
        self._logger = logger.bind(component="tree_sitter_parser")

    def _load_grammars(self) -> None:
        if self._loaded:
            return

        try:
            self._parsers["csharp"] = self._create_csharp_parser()
        except ImportError as e:
            self._logger.warning(f"C# grammar unavailable: {e}")

        self.supported_languages = set(self._parsers)
        self._loaded = True
        self._logger.info(f"Grammars loaded: {', '.join(sorted(self.supported_languages)) or 'none'}")

    @staticmethod
    def _create_csharp_parser() -> "Parser":
        import tree_sitter_c_sharp
        from tree_sitter import Language, Parser

        return Parser(Language(tree_sitter_c_sharp.language()))

    def parse_tree(
        self,
        source_code: str,
        *,
        file_path: str | None = None,
        language: str = "csharp",
    ) -> SyntaxTree:
        """Parse source text into a ``SyntaxTree``.

        Synchronous entry point for callers that do not need the syntax
        error report.

        Raises:
            ParserError: If the language has no grammar.
        """
        tree, _ = self._parse(source_code, file_path or "<string>", language)
        return tree

    def _parse(
        self,
        source_code: str,
        file_path: str,
        language: str,
    ) -> tuple[SyntaxTree, list[SyntaxErrorInfo]]:
        self._load_grammars()

        parser = self._parsers.get(language.lower())
        if parser is None:
            raise ParserError(f"Unsupported language: {language}", file_path=file_path)

        source_bytes = source_code.encode("utf-8")
        ts_tree: Tree | None = parser.parse(source_bytes)
        if ts_tree is None:
            raise ParserError("tree-sitter returned no tree", file_path=file_path)

        errors = [
            SyntaxErrorInfo(
                line=node.start_point[0] + 1,
                column=node.start_point[1] + 1,
                missing=node.is_missing,
            )
            for node in _error_nodes(ts_tree.root_node)
        ]

        root = CSharpNormalizer(source_bytes).normalize(ts_tree)
        tree = SyntaxTree(root=root, language=language.lower(), source=source_code, file_path=file_path)
        return tree, errors

    async def parse_file(
        self,
        file_path: Path | str,
        *,
        encoding: str = "utf-8",
    ) -> ParseResult:
        """Read and parse a C# file.

        Args:
            file_path: File to parse.
            encoding: Text encoding of the file.

        Returns:
            ParseResult for the file, keyed by its absolute path.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnicodeDecodeError: If the file is not valid in ``encoding``.
            ParserError: If the path is not a file or its language is
                unknown or unsupported.
        """
        self._load_grammars()

        path = Path(file_path)
        resolved = str(path.resolve())
        language = self._language_of(path, resolved)

        try:
            source_code = path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            self._logger.warning(f"Cannot decode {resolved} as {encoding}")
            raise

        self._logger.debug(f"Parsing {resolved} as {language}")
        return await self.parse_source(source_code, file_path=resolved, language=language)

    def _language_of(self, path: Path, resolved: str) -> str:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {resolved}")
        if not path.is_file():
            raise ParserError(f"Path is not a file: {resolved}", file_path=resolved)

        language = self.detect_language(path)
        if language is None:
            raise ParserError(f"Cannot detect language for file: {path.name}", file_path=resolved)
        if not self.supports_language(language):
            raise ParserError(f"Unsupported language: {language}", file_path=resolved)
        return language

    async def parse_source(
        self,
        source_code: str,
        *,
        file_path: str | None = None,
        language: str | None = None,
    ) -> ParseResult:
        """Parse in-memory C# source.

        Args:
            source_code: Text to parse.
            file_path: Path recorded on the tree and the result.
            language: Language identifier; guessed from ``file_path`` when
                omitted.

        Returns:
            ParseResult; ``success`` is False when syntax errors were found.

        Raises:
            ValueError: If no language can be determined.
            ParserError: If the language has no grammar.
        """
        if not language and file_path:
            language = self.detect_language(file_path)
        if not language:
            raise ValueError("Language must be specified or inferrable from file_path")

        path = file_path or "<string>"
        tree, errors = self._parse(source_code, path, language)

        if errors:
            self._logger.warning(f"{len(errors)} syntax error(s) in {path}", first=str(errors[0]))

        return ParseResult(
            tree=tree,
            file_path=path,
            language=tree.language,
            parse_errors=errors,
            success=not errors,
        )

    def get_supported_languages(self) -> list[str]:
        """List the languages whose grammar loaded."""
        self._load_grammars()
        return sorted(self._parsers)

    def debug_ast(self, source_code: str, max_depth: int = 10) -> str:
        """Render the normalized tree of a snippet, one node per line.

        Handy for checking which ``Kind`` a construct gets before relying on
        it in a classifier predicate.
        """
        return "".join(_format_lines(self.parse_tree(source_code).root, max_depth))


def _error_nodes(root: "Node") -> list["Node"]:
    """Collect ERROR and missing nodes in document order."""
    if not root.has_error:
        return []

    found: list[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            found.append(node)
        if node.has_error:
            stack.extend(reversed(node.children))
    return found


def _format_lines(node: SyntaxNode, max_depth: int, depth: int = 0) -> list[str]:
    indent = "  " * depth
    if depth >= max_depth:
        return [f"{indent}...\n"]

    line = f"{indent}{node.kind.value} ({node.grammar_type}) [{node.span.start_line}:{node.span.start_column}]"
    if node.text is not None:
        line += f" = {node.text!r}"

    lines = [line + "\n"]
    for child in node.children:
        lines.extend(_format_lines(child, max_depth, depth + 1))
    return lines
