"""Unit tests for message and description helpers."""

import pytest

from git_p4_shelve.utils.helpers import collapse_whitespace, message_prefix, normalize_description


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Fix the frobnicator", "Fix the frobnicator"),
        ("Fix the\nfrobnicator", "Fix the frobnicator"),
        ("Fix\n\n\tthe   frobnicator  ", "Fix the frobnicator"),
        ("", ""),
    ],
)
def test_collapse_whitespace(text: str, expected: str) -> None:
    """Test collapse_whitespace with newlines, tabs and repeated spaces."""
    assert collapse_whitespace(text) == expected


@pytest.mark.parametrize(
    "message,expected",
    [
        pytest.param("Fix the frobnicator when it overheats", "Fix the frobnicator when ", id="truncated to 25 characters"),
        pytest.param("Short\n\nBody text follows here", "Short Body text follows h", id="newlines collapsed before truncation"),
        pytest.param("Tiny", "Tiny", id="shorter than the prefix"),
        pytest.param("", "", id="empty message"),
    ],
)
def test_message_prefix(message: str, expected: str) -> None:
    """Test message_prefix against the 25 character default."""
    assert message_prefix(message) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        pytest.param("Subject\n\nBody", "Subject\n\nBody", id="unchanged"),
        pytest.param("Subject  \n\nBody\t\n", "Subject\n\nBody", id="trailing whitespace removed"),
        pytest.param("\n\nSubject\n\n\n", "Subject", id="surrounding blank lines removed"),
        pytest.param("Subject\r\nBody", "Subject\nBody", id="windows line endings"),
        pytest.param("  Indented subject", "  Indented subject", id="leading indentation kept"),
    ],
)
def test_normalize_description(text: str, expected: str) -> None:
    """Test normalize_description only strips trailing whitespace and blank lines."""
    assert normalize_description(text) == expected
