"""Create-or-overwrite a batch of files with revision-marker preconditions.

Writes run in two stages. First every target's current marker is resolved;
a lookup failure stops the batch before anything is written. Then files are
written in order, each conditioned on its resolved marker. GitHub offers no
multi-file transaction here, so a write failure can leave earlier files
committed; the report names exactly which paths made it.
"""

import logging
from dataclasses import dataclass

from crp_bot.github.abc import ContentsStore
from crp_bot.github.types import DIRECTORY_MARKER, ConflictError, RemoteStoreError
from crp_bot.types import ClientConfig, FileWrite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpsertReport:
    """Outcome of an upsert batch.

    Attributes:
        written: Paths committed, in order
        failed_path: Path whose lookup or write failed, None on success
        error: The failure, None on success
        skipped: Paths never written because the batch stopped
    """

    written: tuple[str, ...]
    failed_path: str | None
    error: RemoteStoreError | None
    skipped: tuple[str, ...]

    @property
    def success(self) -> bool:
        return self.error is None


def upsert_files(
    store: ContentsStore,
    client: ClientConfig,
    writes: list[FileWrite],
    *,
    branch: str,
) -> UpsertReport:
    """Write every file in order, creating or updating as needed.

    Args:
        store: Contents gateway
        client: Repository coordinates
        writes: Files to write, in commit order
        branch: Branch to read markers from and commit to

    Returns:
        UpsertReport describing written, failed and skipped paths
    """
    paths = [write.path for write in writes]

    markers: list[str | None] = []
    for write in writes:
        try:
            marker = store.get_revision_marker(client.owner, client.repo, write.path, branch)
            if marker == DIRECTORY_MARKER:
                raise ConflictError(f"{write.path} is a directory, not a file")
        except RemoteStoreError as e:
            logger.warning(
                "Lookup of %s in %s/%s failed (%s): %s",
                write.path,
                client.owner,
                client.repo,
                e.error_type,
                e.message,
            )
            skipped = tuple(path for path in paths if path != write.path)
            return UpsertReport(written=(), failed_path=write.path, error=e, skipped=skipped)
        markers.append(marker)

    written: list[str] = []
    for position, (write, marker) in enumerate(zip(writes, markers, strict=True)):
        try:
            store.write_file(
                client.owner,
                client.repo,
                write.path,
                content=write.content,
                message=write.message,
                branch=branch,
                expected_marker=marker,
            )
        except RemoteStoreError as e:
            logger.warning(
                "Write of %s in %s/%s failed (%s) after %d file(s): %s",
                write.path,
                client.owner,
                client.repo,
                e.error_type,
                len(written),
                e.message,
            )
            return UpsertReport(
                written=tuple(written),
                failed_path=write.path,
                error=e,
                skipped=tuple(paths[position + 1 :]),
            )
        written.append(write.path)

    return UpsertReport(written=tuple(written), failed_path=None, error=None, skipped=())
