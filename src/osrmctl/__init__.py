"""
Manage a local osrm/osrm-backend container: bootstrap, start/stop and the
extract / partition / customize / routed tools running inside it.
"""
from .config import Settings, load_settings
from .lifecycle import ContainerManager
from .runtime import ContainerStatus, DockerRuntime
from .stages import Pipeline, RoutedOptions
from .store import ConfigStore
__all__ = ["Settings", "load_settings", "ContainerManager", "ContainerStatus",
           "DockerRuntime", "Pipeline", "RoutedOptions", "ConfigStore"]
__version__ = "0.1.0"
