"""Whole-file code metrics.

This module walks a complete syntax tree once and aggregates line counts,
comment lines, statement/class/function counts, the flat complexity count
and the public API surface into a ``MetricsSnapshot``.
"""

import structlog

from ..syntax import SyntaxNode, SyntaxTree
from .classifier import (
    is_class_like,
    is_comment,
    is_complexity_increasing,
    is_documentation_comment,
    is_function_like,
    is_namespace,
    is_public,
    is_return_but_not_last,
    is_statement,
    member_declarations,
)
from .errors import LanguageMismatchError
from .models import ComplexityDistribution, MetricsSnapshot

logger = structlog.get_logger(__name__)

NOSONAR_MARKER = "NOSONAR"


class MetricsCalculator:
    """Calculator for whole-file metrics of a C# syntax tree.

    The tree language is checked on construction, so a mismatched tree is
    rejected before any traversal starts.

    Attributes:
        language: Language identifier this calculator accepts.
    """

    language: str = "csharp"

    def __init__(self, tree: SyntaxTree, *, ignore_header_comments: bool = False) -> None:
        """Initialize the metrics calculator.

        Args:
            tree: The syntax tree to measure.
            ignore_header_comments: Skip comments that precede the first
                code token (license headers and the like).

        Raises:
            LanguageMismatchError: If the tree is not a C# tree.
        """
        if tree.language != self.language:
            raise LanguageMismatchError(self.language, tree.language)

        self.tree = tree
        self.ignore_header_comments = ignore_header_comments
        self._logger = logger.bind(component="metrics_calculator", file_path=tree.file_path)

    def compute(self) -> MetricsSnapshot:
        """Compute all metrics for the tree.

        Returns:
            MetricsSnapshot for the file.
        """
        code_lines: set[int] = set()
        comment_lines: set[int] = set()
        nosonar_lines: set[int] = set()
        statements = 0
        classes = 0
        functions = 0
        complexity = 0
        function_complexities: list[int] = []
        seen_code = False

        for node in self.tree.root.walk():
            if node.is_leaf:
                if is_comment(node):
                    if seen_code or not self.ignore_header_comments:
                        self._collect_comment_lines(node, comment_lines, nosonar_lines)
                elif node.text:
                    seen_code = True
                    code_lines.update(range(node.span.start_line, node.span.end_line + 1))

            if is_statement(node):
                statements += 1
            if is_class_like(node):
                classes += 1
            if is_function_like(node):
                functions += 1
                function_complexities.append(self.calculate_function_complexity(node))
            if is_complexity_increasing(node):
                complexity += 1

        public_api = self.public_api_nodes()

        snapshot = MetricsSnapshot(
            file_path=self.tree.file_path,
            language=self.tree.language,
            line_count=self.tree.line_count,
            code_lines=frozenset(code_lines),
            comment_lines=frozenset(comment_lines),
            nosonar_lines=frozenset(nosonar_lines),
            statements=statements,
            classes=classes,
            functions=functions,
            complexity=complexity,
            public_api=public_api,
            public_undocumented_api=sum(1 for n in public_api if not self._is_documented(n)),
            function_complexity_distribution=ComplexityDistribution.from_values(
                function_complexities
            ),
        )

        self._logger.debug(
            "Computed file metrics",
            lines_of_code=snapshot.lines_of_code,
            statements=statements,
            classes=classes,
            functions=functions,
            complexity=complexity,
        )
        return snapshot

    def public_api_nodes(self) -> frozenset[SyntaxNode]:
        """Collect the declarations forming the public API surface.

        Starting from the top-level declarations, a node is part of the
        surface when it is public. Its members are only visited when it is
        public or a namespace, so a non-public type hides everything nested
        in it.

        Returns:
            The public declarations.
        """
        public_nodes: set[SyntaxNode] = set()
        to_visit = member_declarations(self.tree.root)

        while to_visit:
            member = to_visit.pop()

            public = is_public(member)
            if public:
                public_nodes.add(member)

            if not public and not is_namespace(member):
                continue

            to_visit.extend(member_declarations(member))

        return frozenset(public_nodes)

    @staticmethod
    def calculate_function_complexity(node: SyntaxNode) -> int:
        """Calculate the flat complexity of one function-like declaration.

        Every function starts at 1, then each complexity-increasing construct
        and each return that is not the last statement adds 1.

        Args:
            node: A function-like declaration.

        Returns:
            Complexity of the declaration.
        """
        return 1 + sum(
            1
            for child in node.descendants()
            if is_complexity_increasing(child) or is_return_but_not_last(child)
        )

    @staticmethod
    def _collect_comment_lines(
        comment: SyntaxNode,
        comment_lines: set[int],
        nosonar_lines: set[int],
    ) -> None:
        for offset, line in enumerate((comment.text or "").splitlines()):
            line_number = comment.span.start_line + offset
            if NOSONAR_MARKER in line:
                nosonar_lines.add(line_number)
            elif any(char.isalnum() for char in line):
                comment_lines.add(line_number)

    @staticmethod
    def _is_documented(node: SyntaxNode) -> bool:
        previous = node.previous_sibling()
        return previous is not None and is_documentation_comment(previous)


def compute_metrics(tree: SyntaxTree, *, ignore_header_comments: bool = False) -> MetricsSnapshot:
    """Compute whole-file metrics for a syntax tree.

    Args:
        tree: The syntax tree to measure.
        ignore_header_comments: Skip comments before the first code token.

    Returns:
        MetricsSnapshot for the file.

    Raises:
        LanguageMismatchError: If the tree is not a C# tree.
    """
    return MetricsCalculator(tree, ignore_header_comments=ignore_header_comments).compute()
