"""Link header parsing and page URL helpers.

The API chains pages with an RFC 8288 `Link` header:

    <https://api.github.com/user/1/repos?page=2>; rel="next",
    <https://api.github.com/user/1/repos?page=5>; rel="last"
"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

__all__ = ["parse_next_link", "with_page_size"]


def _split_entries(header: str) -> list[str]:
    """Split on commas outside `<...>`, since targets may contain commas."""
    entries: list[str] = []
    start = 0
    in_target = False
    for i, char in enumerate(header):
        if char == "<":
            in_target = True
        elif char == ">":
            in_target = False
        elif char == "," and not in_target:
            entries.append(header[start:i])
            start = i + 1
    entries.append(header[start:])
    return entries


def parse_next_link(header: str | None) -> str | None:
    """Return the URL of the entry whose `rel` includes "next".

    Entries may appear in any order. Entries without a `<...>` target are
    ignored. Returns None when there is no next page.
    """
    if not header:
        return None

    for entry in _split_entries(header):
        target, _, params = entry.partition(";")
        target = target.strip()
        if not (target.startswith("<") and target.endswith(">")):
            continue

        for param in params.split(";"):
            key, _, value = param.partition("=")
            if key.strip().lower() != "rel":
                continue
            rels = value.strip().strip('"').lower().split()
            if "next" in rels:
                return target[1:-1]

    return None


def with_page_size(url: str, size: int) -> str:
    """Set the `per_page` query parameter, keeping any others."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "per_page"]
    query.append(("per_page", str(size)))
    return urlunsplit(parts._replace(query=urlencode(query)))
