"""Argument parsing functionality for npm-resolve-wesl."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="npm-resolve-wesl",
        description=(
            "Resolve WESL module paths to npm packages and print their bundles"
        ),
        epilog=(
            "examples:\n"
            "  npm-resolve-wesl random_wgsl::pcg\n"
            "  npm-resolve-wesl foo::bar::baz -d /path/to/project\n"
            "  npm-resolve-wesl pkg1::fn pkg2::util --json"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=True,
    )

    parser.add_argument("modules",
                        metavar="MODULE",
                        help="WESL module paths to resolve (e.g. random_wgsl::pcg, foo::bar::baz)",
                        nargs="+",
                        type=str)
    parser.add_argument("-d", "--dir",
                        dest="PROJECT_DIR",
                        help="Project directory containing node_modules (default: current directory)",
                        action="store",
                        type=str,
                        default=".")
    parser.add_argument("-j", "--json",
                        dest="JSON",
                        help="Output bundles as a JSON array",
                        action="store_true")
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Also write the JSON array to this file",
                        action="store",
                        type=str)
    parser.add_argument("-v", "--verbose",
                        dest="VERBOSE",
                        help="Echo inputs and resolved packages on stderr",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
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

    return parser.parse_args(argv)
