"""Exceptions raised by the analysis layer."""


class AnalysisError(Exception):
    """Base class for analysis errors."""


class LanguageMismatchError(AnalysisError):
    """Raised when a tree was produced by an unexpected grammar.

    Attributes:
        expected: Language the analyzer works on.
        actual: Language of the supplied tree.
    """

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a '{expected}' syntax tree, got '{actual}'")


class InvariantViolationError(AnalysisError):
    """Raised when a complexity walk ends with a non-zero nesting level.

    This signals a defect in the walker, never a property of the input.

    Attributes:
        nesting: Nesting level observed at the end of the walk.
    """

    def __init__(self, nesting: int) -> None:
        self.nesting = nesting
        super().__init__(
            "There is a problem with the cognitive complexity walker. "
            f"Expecting ending nesting to be '0' got '{nesting}'"
        )
