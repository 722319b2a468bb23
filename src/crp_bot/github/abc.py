"""Abstract interface for the GitHub contents API."""

from abc import ABC, abstractmethod


class ContentsStore(ABC):
    """Abstract interface for reading revision markers and writing files.

    Implementations treat the repository as a file store addressed by path.
    A revision marker is the blob SHA of the current content at a path.
    """

    @abstractmethod
    def get_revision_marker(self, owner: str, repo: str, path: str, ref: str) -> str | None:
        """Get the current revision marker for a path.

        Args:
            owner: Repository owner
            repo: Repository name
            path: Repository-relative path
            ref: Branch, tag or commit to read from

        Returns:
            The blob SHA for a file, DIRECTORY_MARKER for a directory,
            or None if nothing exists at the path

        Raises:
            RemoteStoreError: For any failure other than not-found
        """
        ...

    @abstractmethod
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
        """Create or overwrite a file with a single commit.

        Args:
            owner: Repository owner
            repo: Repository name
            path: Repository-relative path
            content: UTF-8 text content
            message: Commit message
            branch: Branch to commit to
            expected_marker: Current revision marker when overwriting,
                None when creating a new file

        Returns:
            The revision marker of the written content

        Raises:
            RemoteStoreError: If the write is rejected or fails
        """
        ...
