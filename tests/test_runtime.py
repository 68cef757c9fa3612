"""Tests for the docker CLI client, with subprocess.run patched out."""
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from osrmctl.errors import ExternalCommandFailure
from osrmctl.runtime import ContainerStatus, DockerRuntime


def _done(cmd, returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


@patch("osrmctl.runtime.subprocess.run")
def test_create(mock_run):
    mock_run.side_effect = lambda cmd, **kw: _done(cmd, stdout="f00dbabe\n")
    cid = DockerRuntime().create("osrm/osrm-backend", 5001, 5000, Path("/home/u/osrm/data"), "/data")
    assert cid == "f00dbabe"
    cmd = mock_run.call_args[0][0]
    assert cmd == ["docker", "create", "-t", "-p", "5001:5000", "-v", "/home/u/osrm/data:/data",
                   "osrm/osrm-backend", "sh"]


@patch("osrmctl.runtime.subprocess.run")
def test_create_without_id(mock_run):
    mock_run.side_effect = lambda cmd, **kw: _done(cmd, stdout="")
    with pytest.raises(ExternalCommandFailure) as exc:
        DockerRuntime().create("img", 5000, 5000, Path("/d"), "/data")
    assert "printed no container id" in str(exc.value)
    assert "exit status" not in str(exc.value)


@patch("osrmctl.runtime.subprocess.run")
def test_start_stop(mock_run):
    mock_run.side_effect = lambda cmd, **kw: _done(cmd)
    rt = DockerRuntime(docker="podman")
    rt.start("abc")
    rt.stop("abc")
    assert [c[0][0] for c in mock_run.call_args_list] == [["podman", "start", "abc"], ["podman", "stop", "abc"]]


@pytest.mark.parametrize("stdout,expected", [
    ('{"Status":"running","Running":true}\n', ContainerStatus.RUNNING),
    ('{"Status":"exited","Running":false}\n', ContainerStatus.STOPPED),
    ('{"Status":"created","Running":false}\n', ContainerStatus.STOPPED),
])
@patch("osrmctl.runtime.subprocess.run")
def test_status(mock_run, stdout, expected):
    mock_run.side_effect = lambda cmd, **kw: _done(cmd, stdout=stdout)
    assert DockerRuntime().status("abc") is expected
    assert mock_run.call_args[0][0] == [
        "docker", "inspect", "--type", "container", "--format", "{{json .State}}", "abc"]


@patch("osrmctl.runtime.subprocess.run")
def test_status_absent(mock_run):
    mock_run.side_effect = lambda cmd, **kw: _done(cmd, 1, stderr="Error: No such container: abc\n")
    assert DockerRuntime().status("abc") is ContainerStatus.ABSENT


@patch("osrmctl.runtime.subprocess.run")
def test_status_daemon_down(mock_run):
    mock_run.side_effect = lambda cmd, **kw: _done(cmd, 1, stderr="Cannot connect to the Docker daemon")
    with pytest.raises(ExternalCommandFailure) as exc:
        DockerRuntime().status("abc")
    assert exc.value.returncode == 1


@pytest.mark.parametrize("interactive,flags", [(True, ["-i", "-t"]), (False, [])])
@patch("osrmctl.runtime.subprocess.run")
def test_exec(mock_run, interactive, flags):
    mock_run.side_effect = lambda cmd, **kw: _done(cmd)
    DockerRuntime(interactive=interactive).exec("abc", ["osrm-partition", "/data/map.osrm"])
    assert mock_run.call_args[0][0] == ["docker", "exec", *flags, "abc", "osrm-partition", "/data/map.osrm"]


@patch("osrmctl.runtime.subprocess.run")
def test_exec_failure(mock_run):
    mock_run.side_effect = lambda cmd, **kw: _done(cmd, 137)
    with pytest.raises(ExternalCommandFailure) as exc:
        DockerRuntime(interactive=False).exec("abc", ["osrm-extract"])
    assert exc.value.returncode == 137
    assert exc.value.cmd[:3] == ["docker", "exec", "abc"]


@patch("osrmctl.runtime.subprocess.run", side_effect=FileNotFoundError)
def test_docker_not_installed(mock_run):
    with pytest.raises(ExternalCommandFailure) as exc:
        DockerRuntime().start("abc")
    assert exc.value.returncode == 127
