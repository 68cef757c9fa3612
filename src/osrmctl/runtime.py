"""
Thin client over the docker CLI.

Every call goes through ``subprocess.run`` with an argv list. Calls whose output
we need (create, inspect) capture it; exec inherits the terminal so the OSRM
tools can stream their progress.
"""
from __future__ import annotations
import enum, json, logging, subprocess, sys
from pathlib import Path
from typing import List, Optional

from .errors import ExternalCommandFailure

logger = logging.getLogger(__name__)


class ContainerStatus(enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    ABSENT = "absent"


class DockerRuntime:

    def __init__(self, docker: str = "docker", interactive: Optional[bool] = None) -> None:
        self.docker = docker
        # exec gets -i -t only when we are attached to a terminal
        self.interactive = sys.stdin.isatty() if interactive is None else interactive

    def _run(self, args: List[str], capture: bool = True) -> subprocess.CompletedProcess:
        cmd = [self.docker, *args]
        logger.debug(f"Executing: {' '.join(cmd)}")
        try:
            if capture:
                proc = subprocess.run(cmd, capture_output=True, text=True)
            else:
                proc = subprocess.run(cmd)
        except FileNotFoundError:
            raise ExternalCommandFailure(cmd, 127, f"{self.docker}: command not found")
        if proc.returncode != 0:
            raise ExternalCommandFailure(cmd, proc.returncode, proc.stderr if capture else "")
        return proc

    def create(self, image: str, host_port: int, container_port: int,
               data_dir: Path, container_data_dir: str) -> str:
        """ Create (not start) a container idling in ``sh``; returns its id. """
        proc = self._run([
            "create", "-t",
            "-p", f"{host_port}:{container_port}",
            "-v", f"{Path(data_dir)}:{container_data_dir}",
            image, "sh",
        ])
        container_id = proc.stdout.strip().splitlines()[-1].strip() if proc.stdout.strip() else ""
        if not container_id:
            raise ExternalCommandFailure(
                [self.docker, "create", image], proc.returncode, reason="docker create printed no container id")
        return container_id

    def start(self, container_id: str) -> None:
        self._run(["start", container_id])

    def stop(self, container_id: str) -> None:
        self._run(["stop", container_id])

    def status(self, container_id: str) -> ContainerStatus:
        cmd = [self.docker, "inspect", "--type", "container", "--format", "{{json .State}}", container_id]
        logger.debug(f"Executing: {' '.join(cmd)}")
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            raise ExternalCommandFailure(cmd, 127, f"{self.docker}: command not found")
        if proc.returncode != 0:
            if "no such" in (proc.stderr or "").lower():
                return ContainerStatus.ABSENT
            raise ExternalCommandFailure(cmd, proc.returncode, proc.stderr)
        try:
            state = json.loads(proc.stdout)
        except ValueError:
            raise ExternalCommandFailure(cmd, proc.returncode, f"unexpected inspect output: {proc.stdout!r}")
        return ContainerStatus.RUNNING if state.get("Running") else ContainerStatus.STOPPED

    def exec(self, container_id: str, argv: List[str]) -> None:
        flags = ["-i", "-t"] if self.interactive else []
        self._run(["exec", *flags, container_id, *argv], capture=False)
