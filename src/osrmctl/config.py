from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import os

from .constants import (
    ENV_HOME_DIR, ENV_PREFIX,
    DEFAULT_IMAGE, DEFAULT_DOCKER, DEFAULT_CONTAINER_DATA_DIR,
    DEFAULT_CONTAINER_PORT, DEFAULT_PROFILE_DIR,
)
from .errors import MissingEnvironment, InvalidArgument
from .namespaces.paths import OsrmPaths

DEFAULTS = {
    "image": DEFAULT_IMAGE,
    "docker": DEFAULT_DOCKER,
    "container_data_dir": DEFAULT_CONTAINER_DATA_DIR,
    "container_port": DEFAULT_CONTAINER_PORT,
    "profile_dir": DEFAULT_PROFILE_DIR,
}

INT_KEYS = {"container_port"}


@dataclass(frozen=True)
class Settings:
    """
    Everything the components need, resolved once at startup.
    - paths: home, data directory and config file
    - image / docker: container image and runtime executable
    - container_data_dir: where the data directory is mounted in the container
    - container_port: the port osrm-routed listens on inside the container
    - profile_dir: where the vehicle .lua profiles live in the image
    - provenance: per key, 'ENV' or 'DEFAULT'
    """
    paths: OsrmPaths
    image: str = DEFAULT_IMAGE
    docker: str = DEFAULT_DOCKER
    container_data_dir: str = DEFAULT_CONTAINER_DATA_DIR
    container_port: int = DEFAULT_CONTAINER_PORT
    profile_dir: str = DEFAULT_PROFILE_DIR
    provenance: dict = field(default_factory=dict)

    @property
    def home_dir(self) -> Path:
        return self.paths.home_dir

    @property
    def data_dir(self) -> Path:
        return self.paths.DATA

    @property
    def config_file(self) -> Path:
        return self.paths.CONFIG

    def container_path(self, filename: str) -> str:
        return f"{self.container_data_dir.rstrip('/')}/{filename}"

    def profile_path(self, vehicle: str) -> str:
        return f"{self.profile_dir.rstrip('/')}/{vehicle}.lua"


def parse_keyval_line(line: str) -> tuple[str, str] | None:
    """
    Parse 'KEY=VALUE' into ('KEY', 'VALUE'). Returns None for blank lines,
    comments and lines without '='.
    """
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    k, v = line.split("=", 1)
    return k.strip(), v.strip()


def merge_params(defaults: dict, env_prefix: str, environ=None):
    """
    Produce effective values and a provenance map per key following:
    ENV > defaults
    - env variables are matched as f'{env_prefix}{KEY.upper()}'
    - empty env values are ignored
    """
    environ = os.environ if environ is None else environ
    eff, prov = {}, {}
    for k in defaults:
        env_key = f"{env_prefix}{k.upper()}"
        if environ.get(env_key):
            eff[k] = environ[env_key]; prov[k] = "ENV"
        else:
            eff[k] = defaults[k]; prov[k] = "DEFAULT"
    for k in INT_KEYS & set(eff):
        try:
            eff[k] = int(eff[k])
        except (TypeError, ValueError):
            raise InvalidArgument(f"{env_prefix}{k.upper()} must be an integer, got: {eff[k]!r}")
    return eff, prov


def load_settings(environ=None) -> Settings:
    environ = os.environ if environ is None else environ
    home = environ.get(ENV_HOME_DIR, "")
    if not home:
        raise MissingEnvironment(
            f"{ENV_HOME_DIR} environment variable is not defined. "
            "Please define this variable and try again"
        )
    paths = OsrmPaths(Path(home).expanduser().resolve())
    eff, prov = merge_params(DEFAULTS, ENV_PREFIX, environ)
    return Settings(paths=paths, provenance=prov, **eff)
