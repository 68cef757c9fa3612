"""Shared fixtures: a temporary OSRM home, a working directory and a fake docker runtime."""
import pytest

from osrmctl.config import load_settings
from osrmctl.errors import ExternalCommandFailure
from osrmctl.lifecycle import ContainerManager
from osrmctl.runtime import ContainerStatus
from osrmctl.stages import Pipeline


class FakeRuntime:
    """Records every call and keeps container state in memory."""

    def __init__(self):
        self.calls = []
        self.containers = {}
        self.failing_tools = set()
        self._created = 0

    def create(self, image, host_port, container_port, data_dir, container_data_dir):
        self._created += 1
        container_id = f"{self._created:02d}" + "ab" * 31
        self.calls.append(("create", image, host_port, container_port, str(data_dir), container_data_dir))
        self.containers[container_id] = ContainerStatus.STOPPED
        return container_id

    def start(self, container_id):
        self.calls.append(("start", container_id))
        self.containers[container_id] = ContainerStatus.RUNNING

    def stop(self, container_id):
        self.calls.append(("stop", container_id))
        self.containers[container_id] = ContainerStatus.STOPPED

    def status(self, container_id):
        self.calls.append(("status", container_id))
        return self.containers.get(container_id, ContainerStatus.ABSENT)

    def exec(self, container_id, argv):
        self.calls.append(("exec", container_id, list(argv)))
        if argv[0] in self.failing_tools:
            raise ExternalCommandFailure(["docker", "exec", container_id, *argv], 1)

    def names(self):
        return [c[0] for c in self.calls]

    def execs(self):
        return [c[2] for c in self.calls if c[0] == "exec"]


@pytest.fixture
def home(tmp_path, monkeypatch):
    home = tmp_path / "osrm_home"
    monkeypatch.setenv("OSRM_HOME_DIR", str(home))
    for key in ("OSRM_IMAGE", "OSRM_DOCKER", "OSRM_CONTAINER_DATA_DIR",
                "OSRM_CONTAINER_PORT", "OSRM_PROFILE_DIR"):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def settings(home):
    s = load_settings()
    s.paths.ensure_existence()
    return s


@pytest.fixture
def runtime():
    return FakeRuntime()


@pytest.fixture
def manager(settings, runtime):
    return ContainerManager(settings, runtime=runtime)


@pytest.fixture
def pipeline(manager, workdir):
    return Pipeline(manager, cwd=workdir)


@pytest.fixture
def started(manager):
    """A manager whose container has been created and started."""
    manager.ensure_started()
    return manager
