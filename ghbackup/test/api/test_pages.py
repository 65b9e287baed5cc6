"""Tests for ghbackup.api.pages."""

from __future__ import annotations

import pytest

from ghbackup.api.http import MockHttpClient
from ghbackup.api.pages import RepoDescriptor, RepoPage, fetch_page
from ghbackup.core.config import CloneProtocol
from ghbackup.core.result import Err, Ok

URL = "https://api.github.com/users/octocat/repos?per_page=100"
NEXT = "https://api.github.com/user/583231/repos?per_page=100&page=2"


def _repo(name: str) -> dict[str, str]:
    return {
        "name": name,
        "git_url": f"git://github.com/octocat/{name}.git",
        "clone_url": f"https://github.com/octocat/{name}.git",
        "ssh_url": f"git@github.com:octocat/{name}.git",
    }


class TestFetchPage:
    def test_decodes_repos_in_order(self) -> None:
        http = MockHttpClient()
        http.set_json(URL, [_repo("b"), _repo("a"), _repo("c")])

        result = fetch_page(http, URL)

        assert isinstance(result, Ok)
        assert [r.name for r in result.value.repos] == ["b", "a", "c"]
        assert result.value.repos[0] == RepoDescriptor(
            name="b", clone_url="git://github.com/octocat/b.git"
        )
        assert result.value.next_url is None

    def test_next_url_from_link_header(self) -> None:
        http = MockHttpClient()
        http.set_json(URL, [_repo("a")], headers={"Link": f'<{NEXT}>; rel="next"'})

        result = fetch_page(http, URL)

        assert isinstance(result, Ok)
        assert result.value.next_url == NEXT

    def test_protocol_selects_url_field(self) -> None:
        http = MockHttpClient()
        http.set_json(URL, [_repo("a")])

        https = fetch_page(http, URL, protocol=CloneProtocol.HTTPS)
        ssh = fetch_page(http, URL, protocol=CloneProtocol.SSH)

        assert isinstance(https, Ok)
        assert https.value.repos[0].clone_url == "https://github.com/octocat/a.git"
        assert isinstance(ssh, Ok)
        assert ssh.value.repos[0].clone_url == "git@github.com:octocat/a.git"

    def test_empty_page(self) -> None:
        http = MockHttpClient()
        http.set_json(URL, [])

        assert fetch_page(http, URL) == Ok(RepoPage(repos=[], next_url=None))

    def test_bad_status_is_fatal(self) -> None:
        http = MockHttpClient()
        http.set_json(URL, {"message": "Server Error"}, status=502)

        result = fetch_page(http, URL)

        assert isinstance(result, Err)
        assert result.error.kind == "status"
        assert result.error.status == 502

    def test_object_body_is_fatal(self) -> None:
        http = MockHttpClient()
        http.set_json(URL, {"message": "Not Found"})

        result = fetch_page(http, URL)

        assert isinstance(result, Err)
        assert result.error.kind == "decode"

    def test_item_without_url_is_fatal(self) -> None:
        http = MockHttpClient()
        http.set_json(URL, [_repo("a"), {"name": "b"}])

        result = fetch_page(http, URL)

        assert isinstance(result, Err)
        assert "git_url" in result.error.message

    def test_path_like_name_is_fatal(self) -> None:
        http = MockHttpClient()
        http.set_json(URL, [{**_repo("a"), "name": ".."}])

        result = fetch_page(http, URL)

        assert isinstance(result, Err)
        assert "Invalid repository name" in result.error.message

    @pytest.mark.parametrize("name", ["", "bad\x00name", "tab\tname", "line\nbreak", "del\x7f"])
    def test_control_characters_in_name_are_fatal(self, name: str) -> None:
        http = MockHttpClient()
        http.set_json(URL, [_repo("a"), {**_repo("a"), "name": name}])

        result = fetch_page(http, URL)

        assert isinstance(result, Err)
        assert result.error.kind == "decode"
