"""Tests for upsert_files()."""

from crp_bot.github.fake import FakeContentsStore
from crp_bot.github.types import ConflictError, PermissionDeniedError, TransportError
from crp_bot.types import ClientConfig, FileWrite
from crp_bot.wizard.upsert import upsert_files


def _writes(*paths: str) -> list[FileWrite]:
    return [FileWrite(path=path, content=f"// {path}", message=f"write {path}") for path in paths]


class TestUpsertFiles:
    """Tests for the resolve-then-apply upsert protocol."""

    def test_new_paths_are_created_without_precondition(self, acme: ClientConfig) -> None:
        store = FakeContentsStore()

        report = upsert_files(store, acme, _writes("a.js", "a.css"), branch="main")

        assert report.success
        assert report.written == ("a.js", "a.css")
        assert [call.expected_marker for call in store.write_calls] == [None, None]

    def test_existing_paths_are_updated_with_their_marker(self, acme: ClientConfig) -> None:
        store = FakeContentsStore(files={"a.js": "sha-js", "a.css": "sha-css"})

        upsert_files(store, acme, _writes("a.js", "a.css"), branch="main")

        assert [call.expected_marker for call in store.write_calls] == ["sha-js", "sha-css"]

    def test_mixed_create_and_update(self, acme: ClientConfig) -> None:
        store = FakeContentsStore(files={"a.css": "sha-css"})

        upsert_files(store, acme, _writes("a.js", "a.css"), branch="main")

        assert [call.expected_marker for call in store.write_calls] == [None, "sha-css"]

    def test_resolves_all_markers_before_writing(self, acme: ClientConfig) -> None:
        store = FakeContentsStore()

        upsert_files(store, acme, _writes("a.js", "a.css"), branch="main")

        assert store.operations == [
            ("lookup", "a.js"),
            ("lookup", "a.css"),
            ("write", "a.js"),
            ("write", "a.css"),
        ]

    def test_uses_client_coordinates_and_branch(self, acme: ClientConfig) -> None:
        store = FakeContentsStore()

        upsert_files(store, acme, _writes("a.js"), branch="release")

        lookup = store.lookup_calls[0]
        write = store.write_calls[0]
        assert (lookup.owner, lookup.repo, lookup.ref) == ("acme-corp", "experiments", "release")
        assert (write.owner, write.repo, write.branch) == ("acme-corp", "experiments", "release")
        assert write.message == "write a.js"
        assert write.content == "// a.js"

    def test_lookup_failure_writes_nothing(self, acme: ClientConfig) -> None:
        store = FakeContentsStore()
        error = TransportError("connection reset")
        store.fail_lookup("a.css", error)

        report = upsert_files(store, acme, _writes("a.js", "a.css", "b.js"), branch="main")

        assert not report.success
        assert report.error is error
        assert report.failed_path == "a.css"
        assert report.written == ()
        assert report.skipped == ("a.js", "b.js")
        assert store.write_calls == []

    def test_directory_at_file_path_is_a_conflict(self, acme: ClientConfig) -> None:
        store = FakeContentsStore(directories={"a.js"})

        report = upsert_files(store, acme, _writes("a.js"), branch="main")

        assert isinstance(report.error, ConflictError)
        assert "directory" in report.error.message
        assert store.write_calls == []

    def test_write_failure_reports_partial_progress(self, acme: ClientConfig) -> None:
        """Earlier writes stay committed and are reported; later ones are skipped."""
        store = FakeContentsStore()
        store.fail_write("b.js", PermissionDeniedError("Resource not accessible", status_code=403))

        report = upsert_files(
            store, acme, _writes("a.js", "a.css", "b.js", "b.css"), branch="main"
        )

        assert not report.success
        assert report.written == ("a.js", "a.css")
        assert report.failed_path == "b.js"
        assert report.skipped == ("b.css",)
        assert [call.path for call in store.write_calls] == ["a.js", "a.css", "b.js"]

    def test_empty_batch_succeeds(self, acme: ClientConfig) -> None:
        report = upsert_files(FakeContentsStore(), acme, [], branch="main")

        assert report.success
        assert report.written == ()
