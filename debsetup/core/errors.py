"""
Fatal setup errors.

Recoverable conditions (already installed, optional hook missing, a
source build failing) are logged and reported in results. Everything
here aborts the run; the CLI exits with ``exit_code``.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for errors that abort the setup run."""

    def __init__(self, message: str, argv: list[str] | None = None, exit_code: int = 1):
        super().__init__(message)
        self.argv = list(argv or [])
        self.exit_code = exit_code or 1


class PackageInstallError(SetupError):
    """apt refused or failed an install transaction."""


class RepositoryError(SetupError):
    """Registering a package source or signing key failed."""


class CollaboratorError(SetupError):
    """An external setup script exited non-zero."""
