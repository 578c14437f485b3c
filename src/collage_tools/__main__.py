import argparse
import sys
import logging
from typing import Optional

from collage_tools.api.project import Project
from collage_tools.formats import write_image
from collage_tools.script import ScriptRunner
from collage_tools.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="collage-tools command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Execute a command script")
    run_parser.add_argument("script_file", help="Script file, or - for stdin")

    export_parser = subparsers.add_parser(
        "export", help="Flatten a project file into an image"
    )
    export_parser.add_argument("input_file", help="Input project file")
    export_parser.add_argument("output_file", help="Output image file (.ppm, .png, ...)")

    show_parser = subparsers.add_parser("show", help="Show the layer stack")
    show_parser.add_argument("input_file", help="Input project file")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.verbose:
        logging.getLogger("collage_tools").setLevel(logging.DEBUG)
    else:
        logging.getLogger("collage_tools").setLevel(logging.INFO)

    try:
        if args.command == "run":
            runner = ScriptRunner()
            if args.script_file == "-":
                failures = runner.run(sys.stdin)
            else:
                with open(args.script_file, "r") as f:
                    failures = runner.run(f)
            if failures:
                return 1

        elif args.command == "export":
            project = Project.open(args.input_file)
            write_image(project.flatten(), args.output_file)

        elif args.command == "show":
            project = Project.open(args.input_file)
            print(repr(project))
            for index, layer in enumerate(project):
                print("  [%d] %r" % (index, layer))
    except (ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    return None


if __name__ == "__main__":
    sys.exit(main())
