"""Data models for code analysis.

This module defines the Pydantic models produced by the analysis layer:
complexity thresholds, the cognitive complexity increment trace, per
declaration results and the whole-file metrics snapshot.
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..syntax import SourceSpan, SyntaxNode

FUNCTION_COMPLEXITY_RANGES: tuple[int, ...] = (1, 2, 4, 6, 8, 10, 12)


class ComplexityThresholds(BaseModel):
    """Thresholds above which a declaration is reported.

    Attributes:
        threshold: Maximum cognitive complexity of methods, constructors,
            destructors, operators and fields.
        property_threshold: Maximum cognitive complexity of property and
            indexer accessors.
    """

    model_config = ConfigDict(frozen=True)

    threshold: int = Field(
        default=15,
        ge=0,
        description="Maximum authorized complexity",
    )
    property_threshold: int = Field(
        default=3,
        ge=0,
        description="Maximum authorized complexity in a property",
    )


class ComplexityIncrement(BaseModel):
    """A single contribution to a cognitive complexity score.

    Attributes:
        location: Span of the token that triggered the increment.
        magnitude: Amount added to the score.
        message: Human-readable explanation, e.g. "+3 (incl 2 for nesting)".
    """

    model_config = ConfigDict(frozen=True)

    location: SourceSpan = Field(..., description="Triggering token span")
    magnitude: int = Field(..., ge=1, description="Amount added to the score")
    message: str = Field(..., description="Explanation of the increment")

    @classmethod
    def at(cls, location: SourceSpan, magnitude: int) -> "ComplexityIncrement":
        """Create an increment with its standard message."""
        if magnitude == 1:
            message = "+1"
        else:
            message = f"+{magnitude} (incl {magnitude - 1} for nesting)"
        return cls(location=location, magnitude=magnitude, message=message)


class CognitiveComplexityResult(BaseModel):
    """Outcome of one cognitive complexity walk.

    Attributes:
        score: Total cognitive complexity.
        increments: Increment trace in traversal order.
    """

    model_config = ConfigDict(frozen=True)

    score: int = Field(default=0, ge=0, description="Cognitive complexity")
    increments: tuple[ComplexityIncrement, ...] = Field(
        default=(), description="Increment trace"
    )

    @property
    def secondary_locations(self) -> list[SourceSpan]:
        """Locations of every increment, for use as secondary locations."""
        return [increment.location for increment in self.increments]


class DeclarationCategory(str, Enum):
    """Declaration categories the complexity rule reports on."""

    METHOD = "method"
    CONSTRUCTOR = "constructor"
    DESTRUCTOR = "destructor"
    OPERATOR = "operator"
    ACCESSOR = "accessor"
    FIELD = "field"


class DeclarationComplexity(BaseModel):
    """Cognitive complexity of one declaration, with its threshold.

    Attributes:
        category: Declaration category.
        name: Declaration name (or operator/accessor keyword).
        location: Span the diagnostic is reported at.
        score: Cognitive complexity of the declaration.
        threshold: Threshold applicable to the category.
        increments: Increment trace in traversal order.
    """

    model_config = ConfigDict(frozen=True)

    category: DeclarationCategory = Field(..., description="Declaration category")
    name: str = Field(..., description="Declaration name")
    location: SourceSpan = Field(..., description="Reported span")
    score: int = Field(..., ge=0, description="Cognitive complexity")
    threshold: int = Field(..., ge=0, description="Applicable threshold")
    increments: tuple[ComplexityIncrement, ...] = Field(
        default=(), description="Increment trace"
    )

    @property
    def threshold_exceeded(self) -> bool:
        return self.score > self.threshold

    @property
    def message(self) -> str:
        return (
            f"Refactor this {self.category.value} to reduce its Cognitive Complexity "
            f"from {self.score} to the {self.threshold} allowed"
        )

    @property
    def secondary_locations(self) -> list[SourceSpan]:
        return [increment.location for increment in self.increments]

    def trace_properties(self) -> dict[str, str]:
        """Increment messages keyed by their position in the trace."""
        return {str(index): inc.message for index, inc in enumerate(self.increments)}


class ComplexityDistribution(BaseModel):
    """Histogram of complexity values over fixed buckets.

    Attributes:
        ranges: Lower bound of each bucket, ascending.
        counts: Number of values that fell into each bucket.
    """

    model_config = ConfigDict(frozen=True)

    ranges: tuple[int, ...] = Field(..., min_length=1, description="Bucket lower bounds")
    counts: tuple[int, ...] = Field(..., description="Values per bucket")

    @classmethod
    def from_values(
        cls,
        values: Iterable[int],
        ranges: tuple[int, ...] = FUNCTION_COMPLEXITY_RANGES,
    ) -> "ComplexityDistribution":
        """Bucket values; a value lands in the last bucket whose bound it reaches.

        Values below the first bound are counted in the first bucket.
        """
        counts = [0] * len(ranges)
        for value in values:
            index = 0
            for i, lower in enumerate(ranges):
                if value >= lower:
                    index = i
            counts[index] += 1
        return cls(ranges=ranges, counts=tuple(counts))

    @property
    def total(self) -> int:
        return sum(self.counts)

    def __str__(self) -> str:
        return ";".join(f"{lower}={count}" for lower, count in zip(self.ranges, self.counts))


class MetricsSnapshot(BaseModel):
    """Whole-file metrics.

    Attributes:
        file_path: Path of the measured file.
        language: Language of the measured tree.
        line_count: Number of lines in the file.
        code_lines: Lines holding at least one code token.
        comment_lines: Lines holding meaningful comment text.
        nosonar_lines: Comment lines carrying a NOSONAR marker.
        statements: Number of statements (blocks excluded).
        classes: Number of classes, structs and interfaces.
        functions: Number of function-like declarations.
        complexity: Number of complexity-increasing constructs.
        public_api: Declarations forming the public API surface.
        public_undocumented_api: Public declarations without a
            documentation comment.
        function_complexity_distribution: Distribution of per-function
            complexity.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    file_path: str = Field(..., description="File path")
    language: str = Field(..., description="Language")
    line_count: int = Field(default=0, ge=0, description="Lines")
    code_lines: frozenset[int] = Field(default_factory=frozenset, description="Code lines")
    comment_lines: frozenset[int] = Field(default_factory=frozenset, description="Comment lines")
    nosonar_lines: frozenset[int] = Field(default_factory=frozenset, description="NOSONAR lines")
    statements: int = Field(default=0, ge=0, description="Statement count")
    classes: int = Field(default=0, ge=0, description="Class count")
    functions: int = Field(default=0, ge=0, description="Function count")
    complexity: int = Field(default=0, ge=0, description="Complexity count")
    public_api: frozenset[SyntaxNode] = Field(
        default_factory=frozenset, description="Public API declarations"
    )
    public_undocumented_api: int = Field(
        default=0, ge=0, description="Undocumented public declarations"
    )
    function_complexity_distribution: ComplexityDistribution = Field(
        default_factory=lambda: ComplexityDistribution.from_values([]),
        description="Per-function complexity distribution",
    )

    @property
    def lines_of_code(self) -> int:
        return len(self.code_lines)

    @property
    def comment_line_count(self) -> int:
        return len(self.comment_lines)

    @property
    def public_api_count(self) -> int:
        return len(self.public_api)
