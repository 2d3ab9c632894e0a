"""Argument parsing for the pinref command line."""

import argparse

from .constants import Constants


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="pinref",
        description="pinref - parse, match and intersect resource references",
        add_help=True,
    )

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
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--registry",
                        dest="DEFAULT_REGISTRY",
                        help="Default registry URL for identifiers without one",
                        action="store",
                        type=str)
    parser.add_argument("--namespace",
                        dest="DEFAULT_NAMESPACE",
                        help="Default namespace for bare names",
                        action="store",
                        type=str)
    parser.add_argument("--json",
                        dest="JSON",
                        help="Print results as JSON.",
                        action="store_true")

    sub = parser.add_subparsers(dest="COMMAND", metavar="COMMAND")
    sub.required = True

    ref = sub.add_parser("reference", help="Parse a reference and print its canonical form")
    ref.add_argument("REFERENCE", help="Reference text (quote it)")
    ref.add_argument("-t", "--type",
                     dest="TYPE",
                     help="Context resource type",
                     default=Constants.DEFAULT_TYPE)

    ident = sub.add_parser("identifier", help="Parse an identifier and print its canonical form")
    ident.add_argument("IDENTIFIER", help="Identifier text (quote it)")
    ident.add_argument("-t", "--type",
                       dest="TYPE",
                       help="Context resource type",
                       default=Constants.DEFAULT_TYPE)

    ver = sub.add_parser("version", help="Parse a version and print its canonical form")
    ver.add_argument("VERSION")

    cmp_ = sub.add_parser("compare", help="Compare two versions (-1, 0, 1)")
    cmp_.add_argument("LEFT")
    cmp_.add_argument("RIGHT")

    match = sub.add_parser("match", help="Check versions against a constraint")
    match.add_argument("CONSTRAINT", help="Constraint expression (quote it)")
    match.add_argument("VERSIONS", nargs="+")

    inter = sub.add_parser("intersect", help="Intersect two constraints")
    inter.add_argument("LEFT")
    inter.add_argument("RIGHT")

    select = sub.add_parser("select", help="Pick the highest candidate satisfying a constraint")
    select.add_argument("CONSTRAINT", help="Constraint expression (quote it)")
    select.add_argument("CANDIDATES", nargs="+")
    select.add_argument("--coerce",
                        dest="COERCE",
                        help="Normalize loose candidates such as 1.2 before matching.",
                        action="store_true")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
