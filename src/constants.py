"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1


class SourceKinds(Enum):
    """Source kinds understood by the bundle parser.

    Args:
        Enum (string): tree-sitter grammar used for the source kind.
    """

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MODULE_SEPARATOR = "::"
    SCOPE_SEPARATOR = "__"
    # Module path roots supplied by the linker rather than by npm packages
    BUILTIN_NAMESPACES = ["constants"]

    BUNDLE_BINDING_NAME = "weslBundle"
    BUNDLE_REQUIRED_FIELDS = ("name", "edition")

    PACKAGE_JSON_FILE = "package.json"
    NODE_MODULES_DIR = "node_modules"
    RESOLVE_CONDITIONS = ["node", "import"]
    RESOLVE_EXTENSIONS = [".js", ".json", ".node"]
    RESOLVE_MAIN_FILES = ["index"]

    SOURCE_KIND_EXTENSIONS = {
        ".js": SourceKinds.JAVASCRIPT,
        ".mjs": SourceKinds.JAVASCRIPT,
        ".cjs": SourceKinds.JAVASCRIPT,
        ".jsx": SourceKinds.JAVASCRIPT,
        ".ts": SourceKinds.TYPESCRIPT,
        ".mts": SourceKinds.TYPESCRIPT,
        ".cts": SourceKinds.TYPESCRIPT,
        ".tsx": SourceKinds.TSX,
    }
    DEFAULT_SOURCE_KIND = SourceKinds.JAVASCRIPT

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "NPM_RESOLVE_WESL_LOG_LEVEL"
    ENV_CONFIG = "NPM_RESOLVE_WESL_CONFIG"
    DEFAULT_CONFIG_FILES = ["npm-resolve-wesl.yml", "npm-resolve-wesl.yaml"]
