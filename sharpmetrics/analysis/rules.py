"""Cognitive Complexity rule.

Applies the walker to every registered declaration of a file and compares the
scores against per-category thresholds.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from operator import attrgetter
from types import MappingProxyType

import structlog

from ..syntax import Kind, SyntaxNode, SyntaxTree
from .cognitive import CognitiveComplexityWalker
from .errors import LanguageMismatchError
from .models import ComplexityThresholds, DeclarationCategory, DeclarationComplexity

logger = structlog.get_logger(__name__)

ACCESSOR_KEYWORDS: frozenset[str] = frozenset({"get", "set"})


@dataclass(frozen=True)
class DeclarationRegistration:
    """How a declaration kind is reported.

    Attributes:
        category: Category named in the diagnostic message.
        locate: Returns the node the diagnostic is reported at, or None when
            the declaration is not reported (e.g. ``add`` accessors).
        threshold: Selects the applicable threshold.
    """

    category: DeclarationCategory
    locate: Callable[[SyntaxNode], SyntaxNode | None]
    threshold: Callable[[ComplexityThresholds], int]


def _name_of(node: SyntaxNode) -> SyntaxNode | None:
    name = node.child_by_field("name")
    if name is not None:
        return name
    identifiers = node.children_of_kind(Kind.IDENTIFIER)
    return identifiers[-1] if identifiers else None


def _operator_token_of(node: SyntaxNode) -> SyntaxNode | None:
    operator = node.child_by_field("operator")
    if operator is not None:
        return operator

    keyword = node.find_token("operator")
    if keyword is None:
        return None
    following = keyword.next_token()
    if following is not None and following.text == "checked":
        following = following.next_token()
    return following


def _accessor_keyword_of(node: SyntaxNode) -> SyntaxNode | None:
    keyword = node.child_by_field("name")
    if keyword is None:
        keyword = next((c for c in node.children if c.text in ACCESSOR_KEYWORDS), None)
    if keyword is None or keyword.text not in ACCESSOR_KEYWORDS:
        return None
    return keyword


def _first_declarator_name_of(node: SyntaxNode) -> SyntaxNode | None:
    declarator = next((n for n in node.descendants() if n.kind is Kind.VARIABLE_DECLARATOR), None)
    if declarator is None:
        return None
    return _name_of(declarator) or declarator.first_token()


_threshold = attrgetter("threshold")
_property_threshold = attrgetter("property_threshold")

REGISTRATIONS: Mapping[Kind, DeclarationRegistration] = MappingProxyType(
    {
        Kind.METHOD: DeclarationRegistration(DeclarationCategory.METHOD, _name_of, _threshold),
        Kind.CONSTRUCTOR: DeclarationRegistration(
            DeclarationCategory.CONSTRUCTOR, _name_of, _threshold
        ),
        Kind.DESTRUCTOR: DeclarationRegistration(
            DeclarationCategory.DESTRUCTOR, _name_of, _threshold
        ),
        Kind.OPERATOR: DeclarationRegistration(
            DeclarationCategory.OPERATOR, _operator_token_of, _threshold
        ),
        Kind.ACCESSOR: DeclarationRegistration(
            DeclarationCategory.ACCESSOR, _accessor_keyword_of, _property_threshold
        ),
        Kind.FIELD: DeclarationRegistration(
            DeclarationCategory.FIELD, _first_declarator_name_of, _threshold
        ),
    }
)


class CognitiveComplexityRule:
    """Reports declarations whose cognitive complexity exceeds a threshold.

    Example:
        >>> rule = CognitiveComplexityRule(ComplexityThresholds(threshold=10))
        >>> for finding in rule.findings(tree):
        ...     print(finding.location, finding.message)
    """

    language: str = "csharp"

    def __init__(
        self,
        thresholds: ComplexityThresholds | None = None,
        walker: CognitiveComplexityWalker | None = None,
    ) -> None:
        """Initialize the rule.

        Args:
            thresholds: Thresholds per category. Defaults to 15 and 3.
            walker: Walker used to score declarations.
        """
        self.thresholds = thresholds or ComplexityThresholds()
        self._walker = walker or CognitiveComplexityWalker()
        self._logger = logger.bind(component="cognitive_complexity_rule")

    def evaluate(self, tree: SyntaxTree) -> list[DeclarationComplexity]:
        """Score every registered declaration of a tree.

        Args:
            tree: The syntax tree to check.

        Returns:
            One result per registered declaration, in document order.

        Raises:
            LanguageMismatchError: If the tree is not a C# tree.
            InvariantViolationError: If a walk ends with unbalanced nesting.
        """
        if tree.language != self.language:
            raise LanguageMismatchError(self.language, tree.language)

        results = []
        for node in tree.root.walk():
            registration = REGISTRATIONS.get(node.kind)
            if registration is None:
                continue

            location = registration.locate(node)
            if location is None:
                continue

            walk = self._walker.walk(node)
            results.append(
                DeclarationComplexity(
                    category=registration.category,
                    name=location.text or "",
                    location=location.span,
                    score=walk.score,
                    threshold=registration.threshold(self.thresholds),
                    increments=walk.increments,
                )
            )

        self._logger.debug(
            "Evaluated declarations",
            file_path=tree.file_path,
            declarations=len(results),
        )
        return results

    def findings(self, tree: SyntaxTree) -> list[DeclarationComplexity]:
        """Get the declarations scoring strictly above their threshold."""
        findings = [result for result in self.evaluate(tree) if result.threshold_exceeded]

        for finding in findings:
            self._logger.info(
                finding.message,
                file_path=tree.file_path,
                location=str(finding.location),
            )
        return findings
