"""Front-end interface.

A front end turns source text into the ``SyntaxTree`` the analysis layer
walks. ``TreeSitterParser`` is the bundled implementation; hosts with their
own C# parser can implement ``BaseParser`` or build trees directly with
``SyntaxTreeBuilder``.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from ..syntax import SyntaxTree
from .models import ParseResult

EXTENSION_LANGUAGES: dict[str, str] = {
    ".cs": "csharp",
    ".csx": "csharp",
}


class BaseParser(ABC):
    """Base class for front ends producing ``SyntaxTree`` objects.

    Attributes:
        supported_languages: Language identifiers with a working grammar.
    """

    supported_languages: set[str] = set()

    @abstractmethod
    def parse_tree(
        self,
        source_code: str,
        *,
        file_path: str | None = None,
        language: str = "csharp",
    ) -> SyntaxTree:
        """Parse source text straight into a tree, ignoring syntax errors."""
        ...

    @abstractmethod
    async def parse_file(
        self,
        file_path: Path | str,
        *,
        encoding: str = "utf-8",
    ) -> ParseResult:
        """Read and parse a source file.

        Args:
            file_path: File to parse; its suffix selects the language.
            encoding: Text encoding of the file.

        Returns:
            ParseResult with the tree and the syntax errors found.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnicodeDecodeError: If the file is not valid in ``encoding``.
            ParserError: If the path is unusable or its language has no
                grammar.
        """
        ...

    @abstractmethod
    async def parse_source(
        self,
        source_code: str,
        *,
        file_path: str | None = None,
        language: str | None = None,
    ) -> ParseResult:
        """Parse in-memory source text.

        Args:
            source_code: Text to parse.
            file_path: Path recorded on the tree; also used to guess the
                language when ``language`` is omitted.
            language: Language identifier.

        Returns:
            ParseResult with the tree and the syntax errors found.

        Raises:
            ValueError: If neither argument identifies a language.
            ParserError: If the language has no grammar.
        """
        ...

    def supports_language(self, language: str) -> bool:
        return language.lower() in self.supported_languages

    @staticmethod
    def detect_language(file_path: Path | str) -> str | None:
        """Map a file suffix to a language identifier, or None if unknown."""
        return EXTENSION_LANGUAGES.get(Path(file_path).suffix.lower())


class ParserError(Exception):
    """Raised when a front end cannot produce a tree.

    Attributes:
        message: What went wrong.
        file_path: File being parsed, if any.
        line: 1-indexed line of the problem, if known.
        column: 1-indexed column of the problem, if known.
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.message = message
        self.file_path = file_path
        self.line = line
        self.column = column

        context = [
            f"{key}={value}"
            for key, value in (("file", file_path), ("line", line), ("column", column))
            if value is not None and value != ""
        ]
        super().__init__(f"{message} ({', '.join(context)})" if context else message)
