"""Data models for pull requests and commits."""


class PR:
    """Pull request as returned by the hosting platform."""

    def __init__(
        self,
        number: int,
        title: str,
        body: str,
        html_url: str | None = None,
    ) -> None:
        self.number = number
        self.title = title or ""
        self.body = body or ""
        self.html_url = html_url


class Commit:
    """Single commit in a range: hash, subject line and message body."""

    def __init__(self, sha: str, subject: str, body: str = "") -> None:
        self.sha = sha
        self.subject = subject
        self.body = body or ""

    def __repr__(self) -> str:
        return f"Commit({self.sha[:10]!r}, {self.subject!r})"
