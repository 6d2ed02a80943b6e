"""Exception hierarchy for discogen.

All exceptions inherit from :class:`DiscogenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`discogen.exit_codes`.
The top-level error handler in :func:`discogen.app.main` catches
``DiscogenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    DiscogenError (exit 1)
    +-- FetchError          (exit 6)
    +-- DocumentParseError  (exit 7)
    +-- RenderError         (exit 8)
    +-- OutputWriteError    (exit 9)
    +-- ConfigError         (exit 1)
"""

from discogen.exit_codes import (
    EXIT_FETCH_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_PARSE_ERROR,
    EXIT_RENDER_ERROR,
    EXIT_WRITE_ERROR,
)


class DiscogenError(Exception):
    """Base exception for all discogen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`discogen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class FetchError(DiscogenError):
    """Raised on network failures or HTTP error statuses while fetching a document."""

    exit_code = EXIT_FETCH_ERROR


class DocumentParseError(DiscogenError):
    """Raised when a discovery document or API list is malformed."""

    exit_code = EXIT_PARSE_ERROR


class RenderError(DiscogenError):
    """Raised when a template cannot be loaded or rendered."""

    exit_code = EXIT_RENDER_ERROR


class OutputWriteError(DiscogenError):
    """Raised when an output directory cannot be created or a file cannot be written."""

    exit_code = EXIT_WRITE_ERROR


class ConfigError(DiscogenError):
    """Raised for configuration problems (invalid project config, bad ignore file)."""

    exit_code = EXIT_GENERIC_FAILURE
