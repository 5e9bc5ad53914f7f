"""Pydantic models for parser results."""

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from ..syntax import SyntaxTree


class SyntaxErrorInfo(BaseModel):
    """A syntax error reported by the front end.

    Attributes:
        line: Line of the error (1-indexed).
        column: Column of the error (1-indexed).
        missing: True when the grammar inserted a missing token.
    """

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., ge=1, description="Line of the error")
    column: int = Field(..., ge=1, description="Column of the error")
    missing: bool = Field(False, description="True for a missing token")

    def __str__(self) -> str:
        what = "Missing token" if self.missing else "Syntax error"
        return f"{what} at line {self.line}, column {self.column}"


class ParseResult(BaseModel):
    """Result of parsing a source file.

    tree-sitter always produces a tree, so a result carries one even when the
    source has syntax errors; ``success`` tells whether it is error free.

    Attributes:
        tree: The normalized syntax tree.
        file_path: Path to the parsed file.
        language: Detected or specified language.
        parse_errors: Syntax errors found in the tree.
        success: Whether parsing completed without syntax errors.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tree: InstanceOf[SyntaxTree] = Field(..., description="Parsed syntax tree")
    file_path: str = Field(..., description="Path to the parsed file")
    language: str = Field(..., description="Programming language")
    parse_errors: list[SyntaxErrorInfo] = Field(
        default_factory=list, description="Syntax errors encountered"
    )
    success: bool = Field(True, description="Whether parsing succeeded")
