"""npm-resolve-wesl - resolve WESL module paths to npm packages and load their bundles

    Examples:
        npm-resolve-wesl random_wgsl::pcg
        npm-resolve-wesl foo::bar::baz -d /path/to/project
        npm-resolve-wesl pkg1::fn pkg2::util --json

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys
from pathlib import Path

from args import parse_args
from bundle.errors import BundleError
from cli_config import apply_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from output_validate import SchemaError, validate_output
from wesl_bundles import extract_bundles, resolve_module_paths


def _stderr(message):
    print(message, file=sys.stderr)


def canonical_project_dir(project_dir):
    """Return the absolute, symlink-free project directory or exit."""
    try:
        return str(Path(project_dir).resolve(strict=True))
    except (OSError, RuntimeError) as e:
        logging.error("Error: cannot resolve directory %r: %s", project_dir, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def bundles_to_json(bundles):
    """Validated JSON document for a list of bundles."""
    data = [bundle.to_dict() for bundle in bundles]
    validate_output(data)
    return data


def export_json(data, path):
    """Writes the bundle document to a JSON file.

    Args:
        data (list): Bundle dictionaries.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=2)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def print_bundles(bundles):
    """Prints bundles in human readable form."""
    for bundle in bundles:
        print(f"Bundle: {bundle.name} (edition: {bundle.edition})")
        print("Modules:")
        for name, code in bundle.modules:
            print(f"  {name}:")
            for line in code.splitlines():
                print(f"    {line}")
        print()


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(args.LOG_FILE)
    config_path = apply_config(args.CONFIG)
    if config_path:
        logger.debug("Using configuration from %s", config_path)

    project_dir = canonical_project_dir(args.PROJECT_DIR)

    if args.VERBOSE:
        _stderr(f"Resolving {len(args.modules)} module(s) from {project_dir}")
        for module_path in args.modules:
            _stderr(f"  - {module_path}")

    resolved = sorted(resolve_module_paths(args.modules, project_dir))

    if args.VERBOSE:
        _stderr(f"Resolved packages: {resolved}")
    if is_debug_enabled(logger):
        logger.debug(
            "Resolution finished",
            extra=extra_context(
                event="decision",
                component="cli",
                action="resolve_module_paths",
                count=len(resolved),
            ),
        )

    try:
        bundles = extract_bundles(resolved)
    except BundleError as e:
        logging.error("Error loading bundles: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if args.JSON or args.OUTPUT:
        try:
            data = bundles_to_json(bundles)
        except SchemaError as e:
            logging.error("Bundle output failed validation: %s", e)
            sys.exit(ExitCodes.FILE_ERROR.value)
        if args.OUTPUT:
            export_json(data, args.OUTPUT)
        if args.JSON:
            print(json.dumps(data, ensure_ascii=False, indent=2))
    if not args.JSON:
        print_bundles(bundles)

    if not bundles:
        if not args.VERBOSE:
            logging.warning("No bundles resolved. Try --verbose for more info.")
        sys.exit(ExitCodes.FILE_ERROR.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
