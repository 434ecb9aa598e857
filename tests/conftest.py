import logging
import threading

import pytest

from gkelog.bootstrap import reset_hook
from gkelog.logging import Entry, Hook, Level, StdioSink, clear_hooks, set_output
from gkelog.logging.interceptors import RedirectStdLibHandler
from gkelog.logging.levels import ALL_LEVELS


class FakeMetadata:
    """Stands in for MetadataClient and records every lookup."""

    def __init__(
        self,
        *,
        on_gce: bool = True,
        project_id: str = "my-project",
        instance_name: str = "gke-mycluster-default-pool-1a2b3c4d-xyz1",
        error: Exception | None = None,
    ) -> None:
        self._on_gce = on_gce
        self._project_id = project_id
        self._instance_name = instance_name
        self._error = error
        self._lock = threading.Lock()
        self.calls: list[str] = []

    def _record(self, name: str) -> None:
        with self._lock:
            self.calls.append(name)

    def on_gce(self) -> bool:
        self._record("on_gce")
        return self._on_gce

    def project_id(self) -> str:
        self._record("project_id")
        if self._error is not None:
            raise self._error
        return self._project_id

    def instance_name(self) -> str:
        self._record("instance_name")
        return self._instance_name


class RecordingHook(Hook):
    """Keeps every entry it is fired with."""

    def __init__(self, levels=ALL_LEVELS) -> None:
        self._levels = tuple(levels)
        self.entries: list[Entry] = []

    def levels(self):
        return self._levels

    def fire(self, entry: Entry) -> None:
        self.entries.append(entry)

    def levels_seen(self) -> list[Level | str]:
        return [entry.level for entry in self.entries]


@pytest.fixture
def fake_metadata() -> FakeMetadata:
    return FakeMetadata()


@pytest.fixture
def recording_hook() -> RecordingHook:
    return RecordingHook()


@pytest.fixture(autouse=True)
def isolated_logging():
    """
    Give every test a pristine host logging state: no hooks, stdio output,
    an un-run bootstrap guard and no stdlib redirection left behind.
    """
    root_logger = logging.getLogger()
    saved_level = root_logger.level

    clear_hooks()
    set_output(StdioSink())
    reset_hook()

    yield

    clear_hooks()
    set_output(StdioSink())
    reset_hook()
    root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, RedirectStdLibHandler)]
    root_logger.setLevel(saved_level)


@pytest.fixture
def pod_env(monkeypatch):
    monkeypatch.setenv("POD_NAMESPACE", "default")
    monkeypatch.setenv("POD_NAME", "myservice-7d9f-abcde")


@pytest.fixture
def make_metadata():
    """Factory for FakeMetadata with custom answers."""
    return FakeMetadata


@pytest.fixture
def make_hook():
    """Factory for RecordingHook subscribed to custom levels."""
    return RecordingHook
