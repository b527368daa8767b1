"""Repository search against the GitHub API."""

from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Mapping
from typing import Any

SEARCH_API = "https://api.github.com/search/repositories"
PREVIEW = "https://opengraph.githubassets.com/0/"
HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
    ),
}


class HttpStatusError(Exception):
    """The server answered with a status other than 200."""

    def __init__(self, code: int) -> None:
        super().__init__(f"code {code}")
        self.code = code


def notnull(text: str) -> str:
    """Return the text, or ``None`` in words when it is empty."""
    return text if text else "None"


def search_url(query: str) -> str:
    """Return the search API URL for a query."""
    return SEARCH_API + "?" + urllib.parse.urlencode({"q": query})


def net_get(url: str, headers: Mapping[str, str] | None = None) -> bytes:
    """GET a URL and return its body, raising on any non-200 answer."""
    request = urllib.request.Request(url, headers=dict(headers or HEADERS), method="GET")
    try:
        with urllib.request.urlopen(request, timeout=30) as response:
            body = response.read()
            status = response.status
    except urllib.error.HTTPError as exc:
        raise HttpStatusError(exc.code) from exc
    if status != 200:
        raise HttpStatusError(status)
    return body


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def first_repo(payload: bytes | str | Mapping[str, Any]) -> dict[str, Any]:
    """Return the first repository of a search result."""
    data = json.loads(payload) if isinstance(payload, (bytes, str)) else payload
    if _int(data.get("total_count")) == 0 or not data.get("items"):
        raise LookupError("没有找到这样的仓库")
    return data["items"][0]


def format_repo(repo: Mapping[str, Any]) -> str:
    """Render a repository as a text reply."""
    license_info = repo.get("license")
    license_key = _str(license_info.get("key")) if isinstance(license_info, Mapping) else ""
    return (
        f"{_str(repo.get('full_name'))}\n"
        f"Description: {_str(repo.get('description'))}\n"
        f"Star/Fork/Issue: {_int(repo.get('watchers'))}/{_int(repo.get('forks'))}/"
        f"{_int(repo.get('open_issues'))}\n"
        f"Language: {notnull(_str(repo.get('language')))}\n"
        f"License: {notnull(license_key.upper())}\n"
        f"Last pushed: {_str(repo.get('pushed_at'))}\n"
        f"Jump: {_str(repo.get('html_url'))}\n"
    )


def preview_url(repo: Mapping[str, Any]) -> str:
    """Return the social preview image URL of a repository."""
    return PREVIEW + _str(repo.get("full_name"))


def build_reply(option: str | None, payload: bytes | str | Mapping[str, Any]) -> tuple[str | None, str | None]:
    """Return the text and the image of a reply; ``-p`` gives only the image, ``-t`` only the text."""
    repo = first_repo(payload)
    if option == "-p ":
        return None, preview_url(repo)
    if option == "-t ":
        return format_repo(repo), None
    return format_repo(repo), preview_url(repo)