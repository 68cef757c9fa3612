from __future__ import annotations
from pathlib import Path
import os, logging

from .config import parse_keyval_line
from .constants import DOCKER_ID_KEY

"""
Config store: a flat key-value text file under OSRM_HOME_DIR.

osrm.config
  OSRM_DOCKER_ID=<container id>      # written once, on first 'start'

Lines are only ever appended. If more than one record is present the first
one wins, since a record is never updated after it is written.
"""

logger = logging.getLogger(__name__)


class ConfigStore:

    def __init__(self, path: Path, key: str = DOCKER_ID_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def records(self) -> list[str]:
        """ All recorded values for the key, in file order. """
        if not self.path.exists():
            return []
        out = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            kv = parse_keyval_line(line)
            if kv and kv[0] == self.key and kv[1]:
                out.append(kv[1])
        return out

    def read(self) -> str | None:
        logger.debug(f"Checking {self.path} for OSRM-BACKEND Docker ID ...")
        found = self.records()
        if not found:
            logger.debug("Could not find OSRM-BACKEND Docker ID.")
            return None
        if len(found) > 1:
            logger.warning(f"{self.path} holds {len(found)} {self.key} records; using the first one.")
        logger.debug(f"OSRM-BACKEND Docker ID found. It is {found[0][:12]}")
        return found[0]

    def write(self, value: str) -> None:
        value = value.strip()
        if not value or "\n" in value:
            raise ValueError(f"invalid {self.key} value: {value!r}")
        logger.info(f"Writing {self.key} in {self.path} ...")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        lead = ""
        if self.path.exists() and self.path.stat().st_size:
            with open(self.path, "rb") as f:
                f.seek(-1, os.SEEK_END)
                if f.read(1) != b"\n":
                    lead = "\n"
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(f"{lead}{self.key}={value}\n")
            f.flush()
            os.fsync(f.fileno())
