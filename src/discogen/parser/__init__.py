"""Discovery document parsing.

Turns raw discovery documents (JSON or YAML, decoded by the request layer or
read from disk) into the typed models the generator consumes.

Typical usage::

    from discogen.parser import load_document_file, parse_document

    doc = parse_document(load_document_file("./drive-v3.json"))

Sub-modules:

* :mod:`~discogen.parser.loader` -- Local file I/O, format detection, and
  pydantic validation of documents and the API list.
"""

from discogen.parser.loader import (
    is_url,
    load_document_file,
    parse_api_list,
    parse_content,
    parse_document,
)

__all__ = [
    "is_url",
    "load_document_file",
    "parse_api_list",
    "parse_content",
    "parse_document",
]
