from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging

from .constants import (
    OSM_PBF_SUFFIX, OSRM_SUFFIX, VEHICLES, DEFAULT_VEHICLE, ALGORITHMS,
    DEFAULT_ALGORITHM, DEFAULT_MAX_ALTERNATIVES, DEFAULT_MAX_SIZE,
)
from .errors import InvalidArgument, InvalidFileExtension
from .lifecycle import ContainerManager
from .util import SyncResult, copy_if_newer, clean_directory

logger = logging.getLogger(__name__)


@dataclass
class RoutedOptions:
    """
    Options passed through to osrm-routed.
    - algorithm: 'ch' (Contraction Hierarchies) or 'mld' (Multi-Level Dijkstra)
    - max_*: request size limits
    """
    algorithm: str = DEFAULT_ALGORITHM
    max_alternatives: int = DEFAULT_MAX_ALTERNATIVES
    max_matching_size: int = DEFAULT_MAX_SIZE
    max_nearest_size: int = DEFAULT_MAX_SIZE
    max_table_size: int = DEFAULT_MAX_SIZE
    max_trip_size: int = DEFAULT_MAX_SIZE
    max_viaroute_size: int = DEFAULT_MAX_SIZE

    def __post_init__(self):
        if self.algorithm not in ALGORITHMS:
            raise InvalidArgument(f"Invalid algorithm is provided: {self.algorithm!r} (choose from {', '.join(ALGORITHMS)})")

    def limits(self) -> list[tuple[str, int]]:
        return [
            ("--max-alternatives", self.max_alternatives),
            ("--max-matching-size", self.max_matching_size),
            ("--max-nearest-size", self.max_nearest_size),
            ("--max-table-size", self.max_table_size),
            ("--max-trip-size", self.max_trip_size),
            ("--max-viaroute-size", self.max_viaroute_size),
        ]

    def argv(self) -> list[str]:
        out = []
        for flag, value in self.limits():
            out += [flag, str(value)]
        return out + ["--algorithm", self.algorithm]


def validate_extension(filename: str, suffix: str) -> str:
    """
    Check that filename is a bare name ending in suffix with a non-empty base.
    Returns the base name (filename without suffix).
    """
    name = filename or ""
    if "/" in name or "\\" in name or not name.endswith(suffix) or len(name) == len(suffix):
        raise InvalidFileExtension(name, suffix)
    return name[: -len(suffix)]


class Pipeline:
    """
    The OSRM preprocessing and serving stages. Each stage validates its
    input first, then needs a managed container, then runs one command in it.
    """

    def __init__(self, manager: ContainerManager, cwd: Path | None = None) -> None:
        self.manager = manager
        self.settings = manager.settings
        self.runtime = manager.runtime
        self.cwd = Path(cwd) if cwd else Path.cwd()

    def _exec(self, container_id: str, argv: list[str]) -> None:
        self.runtime.exec(container_id, argv)

    def extract(self, filename: str, vehicle: str = DEFAULT_VEHICLE) -> SyncResult:
        logger.info("Extracting given *.osm.pbf file to compatible *.osrm files.")
        validate_extension(filename, OSM_PBF_SUFFIX)
        if vehicle not in VEHICLES:
            raise InvalidArgument(f"Invalid vehicle: {vehicle!r} (choose from {', '.join(VEHICLES)})")
        container_id = self.manager.require_existing()
        synced = copy_if_newer(self.cwd / filename, self.settings.data_dir / filename)
        logger.info(f"Extracting File: {filename} with {vehicle} ...")
        self._exec(container_id, [
            "osrm-extract", "-p", self.settings.profile_path(vehicle),
            self.settings.container_path(filename),
        ])
        logger.info("Done.")
        return synced

    def partition(self, filename: str) -> None:
        logger.info("Partitioning given *.osrm files.")
        validate_extension(filename, OSRM_SUFFIX)
        container_id = self.manager.require_existing()
        logger.info(f"Partitioning File: {filename} ...")
        self._exec(container_id, ["osrm-partition", self.settings.container_path(filename)])
        logger.info("Done.")

    def customize(self, filename: str) -> None:
        logger.info("Customizing given *.osrm files.")
        validate_extension(filename, OSRM_SUFFIX)
        container_id = self.manager.require_existing()
        logger.info(f"Customizing File: {filename} ...")
        self._exec(container_id, ["osrm-customize", self.settings.container_path(filename)])
        logger.info("Done.")

    def preprocess(self, filename: str, vehicle: str = DEFAULT_VEHICLE) -> None:
        """
        extract -> partition -> customize on the same base name.
        The first failing step aborts the sequence (its error propagates).
        """
        base = validate_extension(filename, OSM_PBF_SUFFIX)
        if vehicle not in VEHICLES:
            raise InvalidArgument(f"Invalid vehicle: {vehicle!r} (choose from {', '.join(VEHICLES)})")
        self.manager.require_existing()
        logger.info("Beginning file preprocessing ...")
        self.extract(base + OSM_PBF_SUFFIX, vehicle=vehicle)
        self.partition(base + OSRM_SUFFIX)
        self.customize(base + OSRM_SUFFIX)
        logger.info("Done.")

    def routed(self, filename: str, options: RoutedOptions | None = None) -> None:
        options = options or RoutedOptions()
        logger.info("Starting Routing engine.")
        validate_extension(filename, OSRM_SUFFIX)
        container_id = self.manager.require_existing()
        summary = ", ".join(f"{flag[2:]} = {value}" for flag, value in options.limits())
        logger.info(f"Starting routing engine with {summary} and finally algorithm = {options.algorithm} ...")
        self._exec(container_id, ["osrm-routed", *options.argv(), self.settings.container_path(filename)])
        logger.info("Done.")

    def clean_data(self) -> int:
        data_dir = self.settings.data_dir
        logger.info(f"Cleaning OSRM-BACKEND data directory: {data_dir}.")
        removed = clean_directory(data_dir)
        logger.info(f"Removed {removed} entries from {data_dir}.")
        return removed
