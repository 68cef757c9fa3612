"""
Error taxonomy. Everything raised on purpose derives from OsrmError and is
turned into a message and exit status 1 by cli.main.
"""
from __future__ import annotations


class OsrmError(Exception):
    exit_code = 1
    show_usage = False


class MissingEnvironment(OsrmError):
    pass


class NoManagedContainer(OsrmError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or (
            "There is no osrm docker available to work with. "
            "Please start osrm docker first by executing command: osrm start"
        ))


class StaleContainerRecord(OsrmError):
    def __init__(self, container_id: str, config_file) -> None:
        self.container_id = container_id
        super().__init__(
            f"Recorded OSRM-BACKEND container {container_id[:12]} no longer exists. "
            f"Remove its line from {config_file} and run: osrm start"
        )


class InvalidArgument(OsrmError):
    show_usage = True


class InvalidFileExtension(OsrmError):
    show_usage = True

    def __init__(self, filename: str, suffix: str) -> None:
        self.filename = filename
        self.suffix = suffix
        super().__init__(f"Invalid file provided: {filename!r}. Please provide a *{suffix} file")


class SourceFileMissing(OsrmError):
    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"SOURCE_FILE:{path} does not exist.")


class ExternalCommandFailure(OsrmError):
    def __init__(self, cmd: list[str], returncode: int, stderr: str = "", reason: str | None = None) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        reason = reason or f"Command failed with exit status {returncode}"
        msg = f"{reason}: {' '.join(self.cmd)}"
        if stderr:
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)
