# Environment
ENV_HOME_DIR = "OSRM_HOME_DIR"
ENV_PREFIX = "OSRM_"

# Layout under OSRM_HOME_DIR
DATA_DIR_NAME = "data"
CONFIG_FILE_NAME = "osrm.config"
DOCKER_ID_KEY = "OSRM_DOCKER_ID"

# Container defaults
DEFAULT_IMAGE = "osrm/osrm-backend"
DEFAULT_DOCKER = "docker"
DEFAULT_CONTAINER_DATA_DIR = "/data"
DEFAULT_CONTAINER_PORT = 5000
DEFAULT_HOST_PORT = 5000
DEFAULT_PROFILE_DIR = "/opt"

# File suffixes
OSM_PBF_SUFFIX = ".osm.pbf"
OSRM_SUFFIX = ".osrm"

# Stage options
VEHICLES = ("car", "foot", "bicycle")
DEFAULT_VEHICLE = "car"
ALGORITHMS = ("ch", "mld")
DEFAULT_ALGORITHM = "mld"
DEFAULT_MAX_ALTERNATIVES = 3000
DEFAULT_MAX_SIZE = 100000

# Logging Configuration
LOG_FORMAT = "%(asctime)s %(levelname)s:%(message)s"
LOG_LEVEL = "INFO"
