from __future__ import annotations
import logging

from .config import Settings
from .constants import DEFAULT_HOST_PORT
from .errors import NoManagedContainer, StaleContainerRecord
from .runtime import ContainerStatus, DockerRuntime
from .store import ConfigStore

logger = logging.getLogger(__name__)


class ContainerManager:
    """
    Tracks the single managed container.

    Unmanaged       no id in the config store
    StoppedManaged  id recorded, runtime reports it is not running
    RunningManaged  id recorded, runtime reports it is running
    """

    def __init__(self, settings: Settings, runtime: DockerRuntime | None = None,
                 store: ConfigStore | None = None) -> None:
        self.settings = settings
        self.runtime = runtime or DockerRuntime(settings.docker)
        self.store = store or ConfigStore(settings.config_file)

    def ensure_started(self, port: int = DEFAULT_HOST_PORT) -> str:
        """ Create, start or leave alone the managed container. Returns its id. """
        logger.info("Starting OSRM-BACKEND container.")
        container_id = self.store.read()
        if container_id is None:
            logger.info(f"Creating OSRM-BACKEND container on local host port = {port}")
            container_id = self.runtime.create(
                self.settings.image, port, self.settings.container_port,
                self.settings.data_dir, self.settings.container_data_dir,
            )
            try:
                self.store.write(container_id)
            except (OSError, ValueError):
                logger.warning(
                    f"Created container {container_id} but could not record it in "
                    f"{self.store.path}. Remove it with: {self.settings.docker} rm {container_id}"
                )
                raise
            logger.info("Starting OSRM-BACKEND container ...")
            self.runtime.start(container_id)
            return container_id

        if port != DEFAULT_HOST_PORT:
            logger.warning(
                f"Ignoring --port {port}: container {container_id[:12]} already exists "
                "and keeps the port it was created with."
            )
        logger.info(f"Checking if OSRM-BACKEND container with ID = {container_id[:12]} is up and running ...")
        status = self.runtime.status(container_id)
        if status is ContainerStatus.ABSENT:
            raise StaleContainerRecord(container_id, self.settings.config_file)
        if status is ContainerStatus.STOPPED:
            logger.info("OSRM-BACKEND container is not running. Starting it up ...")
            self.runtime.start(container_id)
        else:
            logger.info(f"{self.settings.image} is already up and running with ID = {container_id[:12]}.")
        return container_id

    def require_existing(self) -> str:
        # run state is not checked here; exec against a stopped container fails in the runtime
        container_id = self.store.read()
        if container_id is None:
            raise NoManagedContainer()
        return container_id

    def stop(self) -> str:
        container_id = self.require_existing()
        logger.info("Stopping OSRM-BACKEND container ...")
        self.runtime.stop(container_id)
        return container_id

    def status(self):
        """ Returns (id, ContainerStatus), or (None, None) when nothing is managed. """
        container_id = self.store.read()
        if container_id is None:
            return None, None
        return container_id, self.runtime.status(container_id)
