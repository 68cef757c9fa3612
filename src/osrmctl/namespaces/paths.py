"""

Module for managing the naming of paths under the OSRM home directory.

"""

from __future__ import annotations
from pathlib import Path
import logging

from ..constants import DATA_DIR_NAME, CONFIG_FILE_NAME
from ..util import ensure_directory

logger = logging.getLogger(__name__)

class OsrmPaths:
    """ Class to manage osrmctl paths. """

    def __init__(self, home_dir: Path) -> None:
        """ Initialize with the home directory path. """
        self.home_dir = Path(home_dir)
        self.DATA = self.home_dir / DATA_DIR_NAME
        self.CONFIG = self.home_dir / CONFIG_FILE_NAME

    def ensure_existence(self) -> None:
        """ Ensure the data directory and the config file exist. """
        ensure_directory(self.DATA)
        if not self.CONFIG.exists():
            logger.info(f"{self.CONFIG} does not exist, creating one ...")
            self.CONFIG.parent.mkdir(parents=True, exist_ok=True)
            self.CONFIG.touch()
