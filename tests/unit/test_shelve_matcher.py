"""Unit tests for matching commits to pending changelists."""

from unittest.mock import MagicMock

import pytest
from factories import make_mapping, make_pending

from git_p4_shelve.shelve.matcher import find_matching_changelist, match_changelists, prefilter_candidates

MESSAGE = "Fix the frobnicator when it overheats\n\nThe frobnicator now backs off at 90 degrees."


def describe(descriptions: dict[int, str]) -> MagicMock:
    """Return a fetch_description side effect serving the given descriptions."""
    return MagicMock(side_effect=lambda number: descriptions[number])


def test_exact_description_is_matched(changelists: MagicMock) -> None:
    """Test that a changelist whose description equals the message is returned."""
    pending = [make_pending(1, "Fix the frobnicator when it ov")]
    changelists.fetch_description.side_effect = describe({1: MESSAGE})
    match = find_matching_changelist(MESSAGE, pending, changelists)
    assert match is not None and match.number == 1


def test_shared_prefix_is_not_enough(changelists: MagicMock) -> None:
    """Test that a description differing in one character is not matched even though the prefix coincides."""
    pending = [make_pending(1, "Fix the frobnicator when it ov")]
    changelists.fetch_description.side_effect = describe({1: MESSAGE.replace("90", "91")})
    assert find_matching_changelist(MESSAGE, pending, changelists) is None


def test_first_exact_match_in_listing_order_wins(changelists: MagicMock) -> None:
    """Test that listing order breaks ties and later candidates are not fetched."""
    pending = [
        make_pending(3, "Fix the frobnicator when it ov"),
        make_pending(2, "Fix the frobnicator when it ov"),
        make_pending(1, "Fix the frobnicator when it ov"),
    ]
    changelists.fetch_description.side_effect = describe({3: "Fix the frobnicator when it overheats", 2: MESSAGE, 1: MESSAGE})
    match = find_matching_changelist(MESSAGE, pending, changelists)
    assert match is not None and match.number == 2
    assert [call.args[0] for call in changelists.fetch_description.call_args_list] == [3, 2]


def test_prefilter_limits_fetches(changelists: MagicMock) -> None:
    """Test that only changelists whose summary contains the prefix are fetched."""
    pending = [make_pending(1, "Add widget support for the fr"), make_pending(2, "Fix the frobnicator when it ov")]
    changelists.fetch_description.side_effect = describe({2: MESSAGE})
    match = find_matching_changelist(MESSAGE, pending, changelists)
    assert match is not None and match.number == 2
    changelists.fetch_description.assert_called_once_with(2)


def test_prefilter_matches_multiline_summaries() -> None:
    """Test that newlines in the message match the spaces p4 shows in summaries."""
    pending = [make_pending(1, "Short  Body text follows here ")]
    assert [c.number for c in prefilter_candidates("Short\n\nBody text follows here", pending)] == [1]


@pytest.mark.parametrize("message", ["", "Tiny"])
def test_short_messages_prefilter_permissively(message: str) -> None:
    """Test that an empty or short message lets every changelist through the prefilter."""
    pending = [make_pending(1, "Tiny fix"), make_pending(2, "Tiny")]
    assert [c.number for c in prefilter_candidates(message, pending)] == [1, 2]


def test_short_message_still_requires_exact_description(changelists: MagicMock) -> None:
    """Test that a permissive prefilter does not produce a false match."""
    pending = [make_pending(1, "Tiny fix"), make_pending(2, "Tiny")]
    changelists.fetch_description.side_effect = describe({1: "Tiny fix", 2: "Tiny"})
    match = find_matching_changelist("Tiny", pending, changelists)
    assert match is not None and match.number == 2


def test_trailing_whitespace_is_ignored(changelists: MagicMock) -> None:
    """Test that p4's trailing whitespace and blank lines do not prevent a match."""
    pending = [make_pending(1, "Fix the frobnicator when it ov")]
    changelists.fetch_description.side_effect = describe({1: MESSAGE.replace("overheats", "overheats  ") + "\n\n"})
    assert find_matching_changelist(MESSAGE, pending, changelists) is not None


def test_cached_description_is_not_refetched(changelists: MagicMock) -> None:
    """Test that a description already fetched is reused."""
    pending = [make_pending(1, "Fix the frobnicator when it ov", description=MESSAGE)]
    assert find_matching_changelist(MESSAGE, pending, changelists) is not None
    changelists.fetch_description.assert_not_called()


def test_match_changelists_fills_missing_only(changelists: MagicMock) -> None:
    """Test that explicit mappings are kept and the rest are matched."""
    mappings = [
        make_mapping("a", "Explicit commit", changelist=10, explicit=True),
        make_mapping("b", MESSAGE),
        make_mapping("c", "Nothing matches this one"),
    ]
    pending = [make_pending(10, "Explicit commit"), make_pending(20, "Fix the frobnicator when it ov")]
    changelists.fetch_description.side_effect = describe({20: MESSAGE})
    result = match_changelists(mappings, pending, changelists)
    assert [(m.commit.sha, m.changelist, m.explicit) for m in result] == [("a", 10, True), ("b", 20, False), ("c", None, False)]


def test_changelist_is_claimed_once(changelists: MagicMock) -> None:
    """Test that two commits with identical messages never share a changelist."""
    mappings = [make_mapping("a", MESSAGE), make_mapping("b", MESSAGE)]
    pending = [make_pending(20, "Fix the frobnicator when it ov"), make_pending(21, "Fix the frobnicator when it ov")]
    changelists.fetch_description.side_effect = describe({20: MESSAGE, 21: MESSAGE})
    result = match_changelists(mappings, pending, changelists)
    assert [m.changelist for m in result] == [20, 21]


def test_explicitly_mapped_changelist_is_not_matched_again(changelists: MagicMock) -> None:
    """Test that a changelist named explicitly is not matched to another commit."""
    mappings = [make_mapping("a", MESSAGE, changelist=20, explicit=True), make_mapping("b", MESSAGE)]
    pending = [make_pending(20, "Fix the frobnicator when it ov")]
    changelists.fetch_description.side_effect = describe({20: MESSAGE})
    result = match_changelists(mappings, pending, changelists)
    assert [m.changelist for m in result] == [20, None]
    changelists.fetch_description.assert_not_called()
