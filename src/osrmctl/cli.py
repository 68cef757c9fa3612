from __future__ import annotations
import argparse, logging, sys

from .config import load_settings
from .constants import (
    LOG_FORMAT, LOG_LEVEL, DEFAULT_HOST_PORT, VEHICLES, DEFAULT_VEHICLE,
    ALGORITHMS, DEFAULT_ALGORITHM, DEFAULT_MAX_ALTERNATIVES, DEFAULT_MAX_SIZE,
)
from .errors import OsrmError, InvalidArgument
from .lifecycle import ContainerManager
from .runtime import DockerRuntime
from .stages import Pipeline, RoutedOptions

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """ argparse parser whose errors exit with status 1 through InvalidArgument. """

    def error(self, message):
        err = InvalidArgument(message)
        err.usage = self.format_usage()
        raise err


def positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got: {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got: {value!r}")
    return n


def port_number(value: str) -> int:
    n = positive_int(value)
    if n > 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {value!r}")
    return n


def build_parser():
    parser = ArgumentParser(prog="osrm", description="Manage a local osrm/osrm-backend container")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    sub = parser.add_subparsers(dest="cmd", required=True, metavar="COMMAND")
    subparsers = {}

    # start
    p_start = sub.add_parser("start", help="Create or start the OSRM-BACKEND container")
    p_start.add_argument("-p", "--port", type=port_number, default=DEFAULT_HOST_PORT,
                         help=f"Local host port mapped to the container's routing port (default: {DEFAULT_HOST_PORT})")
    subparsers["start"] = p_start

    # stop / status / clean_data
    subparsers["stop"] = sub.add_parser("stop", help="Stop the OSRM-BACKEND container")
    subparsers["status"] = sub.add_parser("status", help="Show the state of the OSRM-BACKEND container")
    subparsers["clean_data"] = sub.add_parser("clean_data", help="Remove all files inside the data directory")

    # extract / preprocess
    for name, help_text in (
        ("extract", "Extract and convert a *.osm.pbf file into *.osrm files"),
        ("preprocess", "extract, partition and customize a *.osm.pbf file"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("-v", "--vehicle", choices=VEHICLES, default=DEFAULT_VEHICLE,
                       help=f"Vehicle profile (default: {DEFAULT_VEHICLE})")
        p.add_argument("file", metavar="FILE.osm.pbf", help="OSM extract in the current directory")
        subparsers[name] = p

    # partition / customize
    for name, help_text in (
        ("partition", "Partition *.osrm files"),
        ("customize", "Customize *.osrm files"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", metavar="FILE.osrm")
        subparsers[name] = p

    # routed
    p_routed = sub.add_parser("routed", help="Run the routing engine on *.osrm files")
    p_routed.add_argument("-a", "--algorithm", choices=ALGORITHMS, default=DEFAULT_ALGORITHM,
                          help="ch (Contraction Hierarchies) or mld (Multi-Level Dijkstra), default: mld")
    p_routed.add_argument("--max-alternatives", type=positive_int, default=DEFAULT_MAX_ALTERNATIVES)
    for opt in ("matching", "nearest", "table", "trip", "viaroute"):
        p_routed.add_argument(f"--max-{opt}-size", type=positive_int, default=DEFAULT_MAX_SIZE)
    p_routed.add_argument("file", metavar="FILE.osrm")
    subparsers["routed"] = p_routed

    return parser, subparsers


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else getattr(logging, LOG_LEVEL)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )


def main(argv=None) -> int:
    parser, subparsers = build_parser()
    try:
        args = parser.parse_args(argv)
    except InvalidArgument as e:
        configure_logging()
        logger.error(f"Invalid argument: {e}")
        sys.stderr.write(getattr(e, "usage", parser.format_usage()))
        return e.exit_code

    configure_logging(args.verbose, args.quiet)
    try:
        settings = load_settings()
        logger.debug(f"Using {settings.home_dir} as OSRM-BACKEND home directory.")
        for key, source in sorted(settings.provenance.items()):
            logger.debug(f"Setting {key} = {getattr(settings, key)!r} ({source})")
        settings.paths.ensure_existence()
        return _dispatch(args, settings)
    except OsrmError as e:
        logger.error(str(e))
        if e.show_usage:
            sys.stderr.write(subparsers.get(args.cmd, parser).format_usage())
        return e.exit_code
    except OSError as e:
        logger.error(str(e))
        return 1


def _dispatch(args, settings) -> int:
    manager = ContainerManager(settings, runtime=DockerRuntime(settings.docker))
    pipeline = Pipeline(manager)

    if args.cmd == "start":
        print(manager.ensure_started(port=args.port))

    elif args.cmd == "stop":
        manager.stop()

    elif args.cmd == "status":
        container_id, status = manager.status()
        if container_id is None:
            print("unmanaged")
        else:
            print(f"{container_id[:12]} {status.value}")

    elif args.cmd == "clean_data":
        pipeline.clean_data()

    elif args.cmd == "extract":
        pipeline.extract(args.file, vehicle=args.vehicle)

    elif args.cmd == "partition":
        pipeline.partition(args.file)

    elif args.cmd == "customize":
        pipeline.customize(args.file)

    elif args.cmd == "preprocess":
        pipeline.preprocess(args.file, vehicle=args.vehicle)

    elif args.cmd == "routed":
        options = RoutedOptions(
            algorithm=args.algorithm,
            max_alternatives=args.max_alternatives,
            max_matching_size=args.max_matching_size,
            max_nearest_size=args.max_nearest_size,
            max_table_size=args.max_table_size,
            max_trip_size=args.max_trip_size,
            max_viaroute_size=args.max_viaroute_size,
        )
        pipeline.routed(args.file, options)

    else:
        raise InvalidArgument(f"Unknown command: {args.cmd!r}")

    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
