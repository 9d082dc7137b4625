"""Tests for transcode status polling."""

from conftest import FakeBackend
from drill_editor.backend.client import BackendError
from drill_editor.backend.transcode import TranscodeStatusPoller


def _poller(backend: FakeBackend, max_attempts: int = 3):
    poller = TranscodeStatusPoller(backend, interval_ms=10000, max_attempts=max_attempts)
    resolved: list[str] = []
    timed_out: list[bool] = []
    poller.status_resolved.connect(resolved.append)
    poller.timed_out.connect(lambda: timed_out.append(True))
    return poller, resolved, timed_out


class TestTranscodeStatusPoller:
    """Test the stop conditions of transcode polling."""

    def test_stops_on_success(self) -> None:
        backend = FakeBackend()
        backend.statuses = ["pending", "success"]
        poller, resolved, timed_out = _poller(backend)

        poller.start("12")
        assert poller.is_active
        poller.poll_now()
        assert resolved == []
        poller.poll_now()

        assert resolved == ["success"]
        assert not poller.is_active
        assert timed_out == []
        assert poller.last_status == "success"

    def test_stops_on_error_status(self) -> None:
        backend = FakeBackend()
        backend.statuses = ["error"]
        poller, resolved, _ = _poller(backend)

        poller.start("12")
        poller.poll_now()
        assert resolved == ["error"]

    def test_missing_status_resolves_empty(self) -> None:
        backend = FakeBackend()
        backend.statuses = [None]
        poller, resolved, _ = _poller(backend)

        poller.start("12")
        poller.poll_now()
        assert resolved == [""]
        assert not poller.is_active

    def test_gives_up_after_max_attempts(self) -> None:
        poller, resolved, timed_out = _poller(FakeBackend(), max_attempts=3)

        poller.start("12")
        for _ in range(3):
            poller.poll_now()

        assert timed_out == [True]
        assert resolved == []
        assert not poller.is_active
        assert poller.attempts == 3

    def test_backend_errors_count_as_pending(self) -> None:
        backend = FakeBackend()
        backend.statuses = [BackendError("offline"), BackendError("offline")]
        poller, resolved, timed_out = _poller(backend, max_attempts=2)

        poller.start("12")
        poller.poll_now()
        assert poller.is_active
        poller.poll_now()

        assert timed_out == [True]
        assert resolved == []

    def test_restart_resets_attempts(self) -> None:
        poller, _, timed_out = _poller(FakeBackend(), max_attempts=2)

        poller.start("1")
        poller.poll_now()
        poller.start("2")
        poller.poll_now()

        assert poller.attempts == 1
        assert poller.drill_id == "2"
        assert timed_out == []
        poller.cancel()
        assert not poller.is_active

    def test_poll_without_drill_is_ignored(self) -> None:
        poller, resolved, timed_out = _poller(FakeBackend())
        poller.poll_now()
        assert poller.attempts == 0
        assert resolved == [] and timed_out == []
