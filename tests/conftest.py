"""Pytest configuration and shared fixtures.

This module provides common fixtures used across the test suite, including
sample C# snippets, tree builders and parser instances.
"""

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from sharpmetrics.config import get_settings
from sharpmetrics.syntax import SyntaxTreeBuilder

# ---------------------------------------------------------------------------
# Sample C# Code Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def straight_line_code() -> str:
    """Method without any structural construct."""
    return """class Calculator
{
    int Add(int a, int b)
    {
        var sum = a + b;
        return sum;
    }
}
"""


@pytest.fixture
def if_else_chain_code() -> str:
    """An if / else if / else chain."""
    return """class Grader
{
    string Grade(int score)
    {
        if (score > 90)
        {
            return "A";
        }
        else if (score > 50)
        {
            return "B";
        }
        else
        {
            return "C";
        }
    }
}
"""


@pytest.fixture
def nested_loops_code() -> str:
    """A while loop nested in a for loop."""
    return """class Looper
{
    void Run(int n)
    {
        for (int i = 0; i < n; i++)
        {
            while (n > 0)
            {
                n--;
            }
        }
    }
}
"""


@pytest.fixture
def recursive_code() -> str:
    """Recursive calls at nesting 0 and 1."""
    return """class Maths
{
    int Factorial(int n)
    {
        if (n <= 1)
        {
            return Factorial(1) * 1;
        }
        return n * Factorial(n - 1);
    }
}
"""


@pytest.fixture
def documented_api_code() -> str:
    """Public API with a documented and an undocumented member."""
    return """// Copyright header
namespace Shop
{
    public class Cart
    {
        /// <summary>Adds an item.</summary>
        public void Add(int item)
        {
        }

        public void Clear()
        {
        }

        private void Reset()
        {
        }
    }

    class Hidden
    {
        public void Run()
        {
        }
    }
}
"""


@pytest.fixture
def syntax_error_code() -> str:
    """C# code with a syntax error."""
    return """class Broken
{
    void M(
"""


# ---------------------------------------------------------------------------
# Builder and Parser Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def builder() -> SyntaxTreeBuilder:
    """Create a fresh SyntaxTreeBuilder."""
    return SyntaxTreeBuilder()


@pytest.fixture
def tree_sitter_parser():
    """Create a TreeSitterParser instance."""
    from sharpmetrics.parser.tree_sitter import TreeSitterParser

    return TreeSitterParser()


# ---------------------------------------------------------------------------
# Settings Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Drop cached settings so environment changes are picked up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Temporary File Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def temp_source_file() -> Generator[Callable[..., Path], None, None]:
    """Factory fixture to create temp files with custom content."""
    created_files: list[Path] = []

    def _create_file(content: str, suffix: str = ".cs") -> Path:
        with tempfile.NamedTemporaryFile(
            mode="w",
            suffix=suffix,
            delete=False,
            encoding="utf-8",
        ) as f:
            f.write(content)
            f.flush()
            temp_path = Path(f.name)
        created_files.append(temp_path)
        return temp_path

    yield _create_file

    # Cleanup
    for path in created_files:
        path.unlink(missing_ok=True)
