"""Tests for ghbackup.api.links."""

from __future__ import annotations

import pytest

from ghbackup.api.links import parse_next_link, with_page_size

NEXT = "https://api.github.com/user/9919/repos?per_page=100&page=2"
LAST = "https://api.github.com/user/9919/repos?per_page=100&page=4"
PREV = "https://api.github.com/user/9919/repos?per_page=100&page=1"


class TestParseNextLink:
    def test_next_first(self) -> None:
        header = f'<{NEXT}>; rel="next", <{LAST}>; rel="last"'
        assert parse_next_link(header) == NEXT

    def test_next_not_first(self) -> None:
        header = f'<{PREV}>; rel="prev", <{NEXT}>; rel="next", <{LAST}>; rel="last"'
        assert parse_next_link(header) == NEXT

    def test_next_last_in_header(self) -> None:
        header = f'<{LAST}>; rel="last", <{PREV}>; rel="first", <{NEXT}>; rel="next"'
        assert parse_next_link(header) == NEXT

    def test_no_next_on_last_page(self) -> None:
        header = f'<{PREV}>; rel="prev", <{PREV}>; rel="first"'
        assert parse_next_link(header) is None

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header(self, header: str | None) -> None:
        assert parse_next_link(header) is None

    def test_unquoted_rel_and_extra_params(self) -> None:
        header = f"<{NEXT}>; title=page; rel=next"
        assert parse_next_link(header) == NEXT

    def test_rel_with_several_values(self) -> None:
        header = f'<{NEXT}>; rel="next last"'
        assert parse_next_link(header) == NEXT

    def test_entry_without_brackets_is_ignored(self) -> None:
        header = f'{PREV}; rel="next", <{NEXT}>; rel="next"'
        assert parse_next_link(header) == NEXT

    def test_does_not_match_rel_prefix(self) -> None:
        header = f'<{PREV}>; rel="nextish"'
        assert parse_next_link(header) is None

    def test_comma_inside_target(self) -> None:
        target = "https://api.github.com/orgs/acme/repos?type=a,b&page=2"
        header = f'<{PREV}>; rel="prev", <{target}>; rel="next", <{LAST}>; rel="last"'
        assert parse_next_link(header) == target


class TestWithPageSize:
    def test_adds_parameter(self) -> None:
        url = with_page_size("https://api.github.com/users/octocat/repos", 100)
        assert url == "https://api.github.com/users/octocat/repos?per_page=100"

    def test_replaces_existing_and_keeps_others(self) -> None:
        url = with_page_size("https://api.github.com/orgs/acme/repos?type=all&per_page=30", 100)
        assert url == "https://api.github.com/orgs/acme/repos?type=all&per_page=100"
