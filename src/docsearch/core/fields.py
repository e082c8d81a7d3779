"""Field tables shared by the document codec, query compiler and projector."""

from __future__ import annotations

# Text fields stored once per document under a ``<field>_<language>`` key.
LANGUAGE_FIELDS: tuple[str, ...] = ("title", "description", "content")

CUSTOM_FIELDS: tuple[str, ...] = ("searchgov_custom1", "searchgov_custom2", "searchgov_custom3")

# Fields always stored as sequences of strings.
ARRAY_FIELDS: tuple[str, ...] = ("tags", *CUSTOM_FIELDS)

# Derived from ``path`` at write time, never surfaced on read.
URI_FIELDS: tuple[str, ...] = ("basename", "extension", "url_path", "domain_name")

TIMESTAMP_FIELD = "changed"

SUPPORTED_LANGUAGES: frozenset[str] = frozenset(
    {
        "ar", "bg", "bn", "ca", "cs", "da", "de", "el", "en", "es", "et", "fa", "fi", "fr",
        "he", "hi", "hr", "ht", "hu", "hy", "id", "it", "ja", "ka", "km", "ko", "lt", "lv",
        "mk", "nl", "pl", "ps", "pt", "ro", "ru", "sk", "so", "sq", "sr", "sw", "te", "th",
        "tr", "uk", "ur", "uz", "vi", "zh",
    }
)

# Fields a search request may ask for via ``include``.
PROJECTABLE_FIELDS: tuple[str, ...] = (
    "language",
    "created",
    "changed",
    "path",
    *LANGUAGE_FIELDS,
    "promote",
    *ARRAY_FIELDS,
    *URI_FIELDS,
    "created_at",
    "updated_at",
)

DEFAULT_INCLUDE: tuple[str, ...] = ("language", "created", "changed", "path", "title", "description")

# Facets requested on every search.
AGGREGATION_FIELDS: tuple[str, ...] = ("tags", *CUSTOM_FIELDS, "extension")

# Shingled copy of the language fields used for spelling suggestions.
SUGGESTION_FIELD = "bigrams"


# Canonical field name -> stored key, per supported language.
LANGUAGE_KEYS: dict[str, dict[str, str]] = {
    language: {name: f"{name}_{language}" for name in LANGUAGE_FIELDS} for language in SUPPORTED_LANGUAGES
}
