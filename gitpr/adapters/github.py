"""GitHub API adapter."""

import logging
from typing import Any, Dict, List

import requests

from gitpr.adapters.base import GitPlatformAdapter, GitPlatformError
from gitpr.models import PR

LOG = logging.getLogger("gitpr.adapters.github")


def _pr_from_api(data: Dict[str, Any]) -> PR:
    return PR(
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or "",
        html_url=data.get("html_url"),
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub (and GitHub Enterprise) REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        LOG.debug("%s %s", method, url)
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=30)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {url}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except ValueError:
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def get_pr(self, repo: str, pr_number: int) -> PR:
        """Fetch a pull request by number."""
        resp = self._request("GET", f"/repos/{repo}/pulls/{pr_number}")
        return _pr_from_api(resp.json())

    def update_pr(self, repo: str, pr_number: int, title: str | None = None, body: str | None = None) -> PR:
        """Update title and/or body of a pull request."""
        payload: Dict[str, Any] = {}
        if title is not None:
            payload["title"] = title
        if body is not None:
            payload["body"] = body
        resp = self._request("PATCH", f"/repos/{repo}/pulls/{pr_number}", json=payload)
        return _pr_from_api(resp.json())

    def create_pr(self, repo: str, base: str, head: str, title: str, body: str) -> PR:
        """Create a pull request."""
        resp = self._request(
            "POST",
            f"/repos/{repo}/pulls",
            json={"title": title, "head": head, "base": base, "body": body or ""},
        )
        return _pr_from_api(resp.json())

    def list_prs(self, repo: str) -> List[PR]:
        """List open pull requests (first page, newest first)."""
        resp = self._request("GET", f"/repos/{repo}/pulls", params={"state": "open", "per_page": 100})
        return [_pr_from_api(d) for d in resp.json() or []]
