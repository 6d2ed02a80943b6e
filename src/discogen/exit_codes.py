"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~discogen.exceptions.DiscogenError` subclass.
CI jobs that run a fleet regeneration can inspect the exit code to tell a
broken discovery service apart from a broken template.

Example::

    $ discogen generate ./drive-v3.json
    $ echo $?
    8   # EXIT_RENDER_ERROR -- a template referenced a missing field
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_FETCH_ERROR = 6
"""A discovery document or the API list could not be fetched."""

EXIT_PARSE_ERROR = 7
"""A discovery document or the API list could not be parsed."""

EXIT_RENDER_ERROR = 8
"""A template failed to render."""

EXIT_WRITE_ERROR = 9
"""An output directory or file could not be written."""

EXIT_PARTIAL_FAILURE = 10
"""A fleet run finished but one or more APIs failed to generate."""
