"""Document codec — Convert between public documents and indexed records.

A public document carries its text under canonical names (``title``,
``description``, ``content``) plus a ``language``.  The indexed record
stores the same text under language-suffixed keys (``title_en``), keeps
tags and custom fields as lists, and adds the URL parts derived from
``path`` so they can be filtered and faceted on.

All functions here are pure apart from the ``updated_at`` stamp written
by :func:`serialize`.
"""

from __future__ import annotations

import re
import warnings
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.builder import ParserRejectedMarkup

from docsearch.core.exceptions import UnexpectedError, ValidationError
from docsearch.core.fields import ARRAY_FIELDS, LANGUAGE_KEYS, SUPPORTED_LANGUAGES, URI_FIELDS

_WHITESPACE = re.compile(r"\s+")

_DROPPED_TAGS = ("script", "style", "noscript", "template")

_BLOCK_TAGS = (
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt", "fieldset",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
    "hr", "li", "main", "nav", "ol", "p", "pre", "section", "table", "td", "th", "tr", "ul",
)

# Each pass strictly shortens markup, so this only bounds pathological input.
_MAX_SANITIZE_PASSES = 8


def sanitize(value: str) -> str:
    """Strip markup from ``value``, keeping only its visible text.

    Tags and attributes are removed, entities are unescaped, block
    elements are separated by whitespace and every whitespace run is
    collapsed to a single space.  The result is a fixed point:
    ``sanitize(sanitize(x)) == sanitize(x)``.

    Reaching that fixed point means escaped markup is stripped too:
    ``"Use &lt;b&gt;x&lt;/b&gt;"`` becomes ``"Use x"``, not ``"Use <b>x</b>"``.
    Text that shows literal tags loses them.
    """
    text = value
    for _ in range(_MAX_SANITIZE_PASSES):
        cleaned = _strip_markup(text)
        if cleaned == text:
            break
        text = cleaned
    return text


def _strip_markup(value: str) -> str:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        try:
            soup = BeautifulSoup(value, "html.parser")
        except ParserRejectedMarkup as e:
            raise UnexpectedError(f"Could not parse markup: {e}") from e

    for tag in soup.find_all(_DROPPED_TAGS):
        tag.decompose()
    for tag in soup.find_all(_BLOCK_TAGS):
        tag.insert_before(" ")
        tag.insert_after(" ")

    return _WHITESPACE.sub(" ", soup.get_text()).strip()


def split_list(value: Any, *, lowercase: bool = False) -> Any:
    """Split a comma-delimited string into trimmed, non-empty segments.

    Sequences pass through untouched; whitespace inside a segment is kept
    (``"this that"`` stays one element).
    """
    if not isinstance(value, str):
        return value
    segments = (segment.strip() for segment in value.split(","))
    return [segment.lower() if lowercase else segment for segment in segments if segment]


def check_language(language: Any) -> str:
    """Return ``language`` as a supported ISO code or raise ``ValidationError``."""
    code = str(language).strip().lower() if language is not None else ""
    if not code:
        raise ValidationError("language is missing")
    if code not in SUPPORTED_LANGUAGES:
        raise ValidationError("language does not have a valid value")
    return code


def serialize(document: Mapping[str, Any], language: Any) -> dict[str, Any]:
    """Build the indexed record for ``document`` in ``language``.

    Args:
        document: Public document fields.
        language: ISO language code of the document text.

    Returns:
        A new record dict ready to be written to the engine.

    Raises:
        ValidationError: If ``language`` is absent or unsupported, or if
            ``path`` is not an absolute URL.
    """
    keys = LANGUAGE_KEYS[check_language(language)]
    record: dict[str, Any] = {}

    for name, value in document.items():
        if name in keys:
            record[keys[name]] = sanitize(value) if isinstance(value, str) else value
        elif name in ARRAY_FIELDS:
            record[name] = split_list(value, lowercase=name == "tags")
        else:
            record[name] = value

    if document.get("path"):
        record.update(decompose_uri(document["path"]))

    record["updated_at"] = datetime.now(UTC)
    return record


def deserialize(record: Mapping[str, Any], language: Any) -> dict[str, Any]:
    """Rebuild the public document shape from an indexed record.

    Language-suffixed text for ``language`` is surfaced under its canonical
    name; a missing suffixed field is omitted rather than defaulted.  The
    URL parts derived at write time are dropped.
    """
    keys = LANGUAGE_KEYS[check_language(language)]
    stored_names = {stored: name for name, stored in keys.items()}
    document: dict[str, Any] = {}

    for key, value in record.items():
        if key in stored_names:
            document[stored_names[key]] = value
        elif key not in URI_FIELDS:
            document[key] = value
    return document


def decompose_uri(path: str) -> dict[str, str]:
    """Split an absolute URL into the parts indexed alongside a document.

    Example:
        >>> decompose_uri("https://www.agency.gov/directory/PAGE1.PDF")
        {'basename': 'PAGE1', 'extension': 'pdf', 'url_path': '/directory/PAGE1.PDF', 'domain_name': 'www.agency.gov'}

    Raises:
        ValidationError: If ``path`` is not a well-formed absolute URL.
    """
    try:
        parts = urlsplit(str(path).strip())
        port = parts.port
    except ValueError as e:
        raise ValidationError("path is invalid") from e
    if not parts.scheme or not parts.hostname:
        raise ValidationError("path is invalid")

    # Host as written: no userinfo, no port, case kept.
    host = parts.netloc.rpartition("@")[2]
    if port is not None or host.endswith(":"):
        host = host.rpartition(":")[0]

    url_path = parts.path or "/"
    segment = url_path.rpartition("/")[2]
    if "." in segment:
        basename, _, extension = segment.rpartition(".")
    else:
        basename, extension = segment, ""

    return {
        "basename": basename,
        "extension": extension.lower(),
        "url_path": url_path,
        "domain_name": host,
    }
