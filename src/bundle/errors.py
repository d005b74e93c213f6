"""Errors raised while loading a weslBundle file."""

from __future__ import annotations

from typing import Optional, Sequence


class BundleError(Exception):
    """Base class for bundle extraction failures."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class BundleReadError(BundleError):
    """Raised when the bundle file cannot be read."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(path, f"Failed to read {path}: {cause}")
        self.cause = cause


class BundleSyntaxError(BundleError):
    """Raised when the parser reports problems in the bundle source."""

    def __init__(self, path: str, diagnostics: Sequence[str]):
        self.diagnostics = list(diagnostics)
        super().__init__(
            path, f"Parse errors in {path}: {'; '.join(self.diagnostics)}"
        )


class BundleNotFoundError(BundleError):
    """Raised when the file has no top-level weslBundle declaration."""

    def __init__(self, path: str, binding: str = "weslBundle"):
        super().__init__(path, f"{binding} not found in {path}")


class BundleMissingFieldError(BundleError):
    """Raised when the weslBundle object lacks required fields."""

    def __init__(self, path: str, missing: Sequence[str]):
        self.missing = tuple(missing)
        super().__init__(
            path, f"weslBundle in {path} is missing: {', '.join(self.missing)}"
        )
