"""Hosting service API access.

- accounts: user / organization classification
- pages: one page of a repository listing
- repos: all pages of an account's listing
- http: injectable HTTP client

Usage:
    from ghbackup.api import RealHttpClient, RepositoryEnumerator, classify_account

    http = RealHttpClient(token)
    account = classify_account(http, "https://api.github.com", "octocat").unwrap()
"""

from ghbackup.api.accounts import Account, AccountKind, classify_account
from ghbackup.api.errors import ApiError
from ghbackup.api.http import HttpClient, HttpError, HttpResponse, MockHttpClient, RealHttpClient
from ghbackup.api.links import parse_next_link, with_page_size
from ghbackup.api.pages import RepoDescriptor, RepoPage, fetch_page
from ghbackup.api.repos import RepositoryEnumerator

__all__ = [
    # accounts
    "Account",
    "AccountKind",
    "classify_account",
    # errors
    "ApiError",
    # http
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
    # links
    "parse_next_link",
    "with_page_size",
    # pages
    "RepoDescriptor",
    "RepoPage",
    "fetch_page",
    # repos
    "RepositoryEnumerator",
]
