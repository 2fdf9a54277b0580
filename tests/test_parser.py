from __future__ import annotations

import pytest

from work_protocol.parser import CommitMessageParser


@pytest.mark.parametrize(
    "message,title,num",
    [
        ("Fix bug (#42)", "Fix bug", 42),
        ("Add login page (#1)", "Add login page", 1),
        ("Bump deps (#007)", "Bump deps", 7),
        ("Use (optional) cache (#15)", "Use (optional) cache", 15),
        ("Fix bug (#42)  ", "Fix bug", 42),
        ("Fix bug   (#42)", "Fix bug", 42),
    ],
)
def test_parse_trailing_pr_marker(message: str, title: str, num: int) -> None:
    parsed = CommitMessageParser.parse(message)
    assert parsed.title == title
    assert parsed.pr_num == num
    assert parsed.has_pr


@pytest.mark.parametrize(
    "message",
    [
        "Refactor module",
        "Revert (#12) and retry",
        "(#42)",
        "Fix bug (#abc)",
        "Fix bug #42",
        "Fix bug (42)",
        "",
    ],
)
def test_parse_without_marker_keeps_raw_message(message: str) -> None:
    parsed = CommitMessageParser.parse(message)
    assert parsed.title == message
    assert parsed.pr_num == -1
    assert not parsed.has_pr


def test_parse_none_does_not_raise() -> None:
    parsed = CommitMessageParser.parse(None)
    assert parsed.title == ""
    assert parsed.pr_num == -1


def test_parse_squash_merge_with_body_uses_subject() -> None:
    message = "Add export (#7)\n\n* first change\n* second change (#3)"
    parsed = CommitMessageParser.parse(message)
    assert parsed.title == "Add export"
    assert parsed.pr_num == 7


def test_parse_marker_only_in_body_is_ignored() -> None:
    message = "Merge branch\n\nSee (#99)"
    parsed = CommitMessageParser.parse(message)
    assert parsed.title == message
    assert parsed.pr_num == -1
