"""Index settings and mappings for collection and document indices."""

from __future__ import annotations

from typing import Any

from docsearch.core.fields import ARRAY_FIELDS, LANGUAGE_FIELDS, SUGGESTION_FIELD, SUPPORTED_LANGUAGES, URI_FIELDS

# Built-in OpenSearch language analyzers; other languages use "standard".
LANGUAGE_ANALYZERS: dict[str, str] = {
    "ar": "arabic",
    "bg": "bulgarian",
    "bn": "bengali",
    "ca": "catalan",
    "cs": "czech",
    "da": "danish",
    "de": "german",
    "el": "greek",
    "en": "english",
    "es": "spanish",
    "et": "estonian",
    "fa": "persian",
    "fi": "finnish",
    "fr": "french",
    "hi": "hindi",
    "hu": "hungarian",
    "hy": "armenian",
    "id": "indonesian",
    "it": "italian",
    "ja": "cjk",
    "ko": "cjk",
    "lt": "lithuanian",
    "lv": "latvian",
    "nl": "dutch",
    "pt": "portuguese",
    "ro": "romanian",
    "ru": "russian",
    "th": "thai",
    "tr": "turkish",
    "zh": "cjk",
}

_KEYWORD = {"type": "keyword"}
_DATE = {"type": "date"}


def _language_templates() -> list[dict[str, Any]]:
    templates = []
    for language in sorted(SUPPORTED_LANGUAGES):
        templates.append(
            {
                f"text_{language}": {
                    "match_pattern": "regex",
                    "match": rf"^({'|'.join(LANGUAGE_FIELDS)})_{language}$",
                    "mapping": {
                        "type": "text",
                        "analyzer": LANGUAGE_ANALYZERS.get(language, "standard"),
                        "copy_to": SUGGESTION_FIELD,
                    },
                }
            }
        )
    return templates


def document_index_body() -> dict[str, Any]:
    """Settings and mappings for a collection's documents index."""
    properties: dict[str, Any] = {
        "language": _KEYWORD,
        "path": _KEYWORD,
        "promote": {"type": "boolean"},
        "created": _DATE,
        "changed": _DATE,
        "created_at": _DATE,
        "updated_at": _DATE,
        SUGGESTION_FIELD: {"type": "text", "analyzer": "bigrams"},
    }
    properties.update({name: _KEYWORD for name in (*ARRAY_FIELDS, *URI_FIELDS)})

    return {
        "settings": {
            "analysis": {
                "filter": {
                    "bigrams_filter": {
                        "type": "shingle",
                        "min_shingle_size": 2,
                        "max_shingle_size": 2,
                        "output_unigrams": True,
                    }
                },
                "analyzer": {
                    "bigrams": {
                        "type": "custom",
                        "tokenizer": "standard",
                        "filter": ["lowercase", "bigrams_filter"],
                    }
                },
            }
        },
        "mappings": {
            "dynamic_templates": _language_templates(),
            "properties": properties,
        },
    }


def collections_index_body() -> dict[str, Any]:
    """Mappings for the index holding collection records."""
    return {
        "mappings": {
            "properties": {
                "token": _KEYWORD,
                "created_at": _DATE,
                "updated_at": _DATE,
            }
        }
    }
