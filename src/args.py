"""Argument parsing functionality for librarian."""

import argparse
import sys

from constants import Constants, ExitCodes


class LibrarianArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with the usage-error code."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCodes.USAGE_ERROR.value, f"{self.prog}: error: {message}\n")


def build_parser():
    """Build the argument parser."""
    parser = LibrarianArgumentParser(
        prog=Constants.PROG,
        description=(
            "Locate librarian files for libraries and print their variables"
        ),
        add_help=True,
    )

    parser.add_argument("-d", "--deps",
                        dest="DEPS",
                        help="Include dependencies listed in the 'deps' variable, recursively.",
                        action="store_true")
    parser.add_argument("-l", "--locate",
                        dest="LOCATE",
                        help="Print the pathnames of the librarian files instead of variables.",
                        action="store_true")
    parser.add_argument("-o", "--oldest",
                        dest="OLDEST",
                        help="Prefer the oldest satisfying version rather than the newest.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("TOKENS",
                        help="VARIABLE names (uppercase) and LIBRARY[=VERSION|>[=]LO[<[=]HI]|<[=]HI] requirements",
                        nargs="*",
                        metavar="TOKEN")
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
