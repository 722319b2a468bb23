"""Production implementation of ContentsStore using the GitHub REST API."""

import base64
import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from crp_bot.github.abc import ContentsStore
from crp_bot.github.types import (
    DIRECTORY_MARKER,
    NotFoundError,
    RemoteStoreError,
    TransportError,
    error_for_status,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

# Raw error bodies (HTML pages) are cut so the error dialog stays within Slack's limits.
MAX_ERROR_MESSAGE_LENGTH = 500


class RealContentsStore(ContentsStore):
    """Talks to `/repos/{owner}/{repo}/contents/{path}` with a bearer token.

    Attributes:
        token: GitHub token with contents read/write permission
        base_url: API root (e.g., "https://api.github.com")
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self, *, token: str, base_url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def get_revision_marker(self, owner: str, repo: str, path: str, ref: str) -> str | None:
        query = urllib.parse.urlencode({"ref": ref})
        url = f"{self._contents_url(owner, repo, path)}?{query}"
        try:
            data = self._request("GET", url, body=None)
        except NotFoundError:
            logger.debug("No content at %s/%s:%s@%s", owner, repo, path, ref)
            return None

        if isinstance(data, list):
            return DIRECTORY_MARKER
        if isinstance(data, dict) and data.get("sha"):
            return str(data["sha"])
        return None

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
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if expected_marker is not None:
            body["sha"] = expected_marker

        data = self._request("PUT", self._contents_url(owner, repo, path), body=body)
        logger.info(
            "%s %s/%s:%s on %s",
            "Updated" if expected_marker is not None else "Created",
            owner,
            repo,
            path,
            branch,
        )
        written = data.get("content") if isinstance(data, dict) else None
        if isinstance(written, dict) and written.get("sha"):
            return str(written["sha"])
        return ""

    def _contents_url(self, owner: str, repo: str, path: str) -> str:
        quoted_owner = urllib.parse.quote(owner, safe="")
        quoted_repo = urllib.parse.quote(repo, safe="")
        quoted_path = urllib.parse.quote(path.lstrip("/"), safe="/")
        return f"{self._base_url}/repos/{quoted_owner}/{quoted_repo}/contents/{quoted_path}"

    def _request(self, method: str, url: str, *, body: dict[str, Any] | None) -> Any:
        """Send a request and decode the JSON response.

        Raises:
            RemoteStoreError: Variant matching the HTTP status, or
                TransportError when no response was received
        """
        data = json.dumps(body).encode("utf-8") if body is not None else None
        request = urllib.request.Request(
            url,
            data=data,
            method=method,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "Content-Type": "application/json",
                "User-Agent": "crp-bot",
            },
        )

        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                payload = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            raw = e.read().decode("utf-8") if e.fp else ""
            raise error_for_status(e.code, _error_message(e.code, raw, e.reason)) from e
        except urllib.error.URLError as e:
            raise TransportError(f"GitHub request failed: {e.reason}") from e
        except TimeoutError as e:
            raise TransportError(f"GitHub request timed out after {self._timeout}s") from e
        except (OSError, http.client.HTTPException) as e:
            # Connection drops while reading the response are not wrapped by urlopen.
            raise TransportError(f"GitHub request failed: {type(e).__name__}: {e}") from e

        if not payload:
            return {}
        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            raise RemoteStoreError(f"GitHub returned invalid JSON: {e}") from e


def _error_message(status_code: int, raw: str, reason: str) -> str:
    """Extract GitHub's `message` field, falling back to the raw body or reason."""
    message = raw or reason
    if raw:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict) and parsed.get("message"):
            message = str(parsed["message"])
    if len(message) > MAX_ERROR_MESSAGE_LENGTH:
        message = message[:MAX_ERROR_MESSAGE_LENGTH].rstrip() + "..."
    return f"{message} ({status_code})"
