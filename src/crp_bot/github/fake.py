"""Fake implementation of ContentsStore for testing."""

from dataclasses import dataclass

from crp_bot.github.abc import ContentsStore
from crp_bot.github.types import DIRECTORY_MARKER, RemoteStoreError


@dataclass(frozen=True)
class LookupCall:
    """Record of a get_revision_marker() call for test assertions."""

    owner: str
    repo: str
    path: str
    ref: str


@dataclass(frozen=True)
class WriteCall:
    """Record of a write_file() call for test assertions.

    Attributes:
        owner: Repository owner
        repo: Repository name
        path: Target path
        content: Content that was written
        message: Commit message
        branch: Target branch
        expected_marker: Precondition passed with the write (None = create)
    """

    owner: str
    repo: str
    path: str
    content: str
    message: str
    branch: str
    expected_marker: str | None


class FakeContentsStore(ContentsStore):
    """In-memory implementation of ContentsStore for testing.

    Files are tracked as path -> marker, ignoring owner/repo/ref. Failures can
    be configured per path, and every call is recorded in order.

    Example:
        >>> store = FakeContentsStore(files={"acme-tests/hero/var-1.js": "abc123"})
        >>> store.get_revision_marker("acme", "site", "acme-tests/hero/var-1.js", "main")
        'abc123'
        >>> store.fail_lookup("acme-tests/hero", RemoteStoreError("boom"))
    """

    def __init__(
        self,
        *,
        files: dict[str, str] | None = None,
        directories: set[str] | None = None,
    ) -> None:
        self._files: dict[str, str] = dict(files) if files is not None else {}
        self._directories: set[str] = set(directories) if directories is not None else set()
        self._contents: dict[str, str] = {}
        self._lookup_errors: dict[str, RemoteStoreError] = {}
        self._write_errors: dict[str, RemoteStoreError] = {}
        self._lookup_calls: list[LookupCall] = []
        self._write_calls: list[WriteCall] = []
        self._operations: list[tuple[str, str]] = []
        self._next_marker = 1

    def get_revision_marker(self, owner: str, repo: str, path: str, ref: str) -> str | None:
        self._lookup_calls.append(LookupCall(owner=owner, repo=repo, path=path, ref=ref))
        self._operations.append(("lookup", path))
        if path in self._lookup_errors:
            raise self._lookup_errors[path]
        if path in self._directories:
            return DIRECTORY_MARKER
        return self._files.get(path)

    def write_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        content: str,
        message: str,
        branch: str,
        expected_marker: str | None,
    ) -> str:
        self._write_calls.append(
            WriteCall(
                owner=owner,
                repo=repo,
                path=path,
                content=content,
                message=message,
                branch=branch,
                expected_marker=expected_marker,
            )
        )
        self._operations.append(("write", path))
        if path in self._write_errors:
            raise self._write_errors[path]

        marker = f"sha-{self._next_marker}"
        self._next_marker += 1
        self._files[path] = marker
        self._contents[path] = content
        return marker

    def fail_lookup(self, path: str, error: RemoteStoreError) -> None:
        """Make get_revision_marker() raise for a path."""
        self._lookup_errors[path] = error

    def fail_write(self, path: str, error: RemoteStoreError) -> None:
        """Make write_file() raise for a path."""
        self._write_errors[path] = error

    def content_at(self, path: str) -> str | None:
        """Content written to a path by this fake, None if never written."""
        return self._contents.get(path)

    @property
    def lookup_calls(self) -> list[LookupCall]:
        """Read-only access to recorded lookups."""
        return list(self._lookup_calls)

    @property
    def write_calls(self) -> list[WriteCall]:
        """Read-only access to recorded writes."""
        return list(self._write_calls)

    @property
    def operations(self) -> list[tuple[str, str]]:
        """All calls in order as ("lookup" | "write", path) pairs."""
        return list(self._operations)
