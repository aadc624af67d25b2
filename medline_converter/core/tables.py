"""MEDLINE ↔ canonical translation tables for fields and reference types.

WHY: Both directions of the codec are driven by the same two tables. If
the parse-side and output-side lookups were maintained by hand they would
drift, and a record would stop surviving a round trip. Deriving the
reverse maps from one source table keeps them consistent by construction.

HOW: _FIELDS and _TYPES are the canonical source tables. The lookup maps
are built from them once at import time and exposed as read-only
MappingProxyType views. Lookup functions are a direct dict lookup with a
defined fallback.

RULES:
- Tags are unique, canonical names are unique, is_array is fixed per field
- Unknown tags and unknown field names return None (never raise)
- Several MEDLINE labels may share one canonical type; on output the
  first registered label wins ("LEGAL CASES" for legalRuleOrRegulation)
- Unmapped labels parse to UNKNOWN_TYPE
- Unmapped canonical types are written using the caller's default type
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from medline_converter.config import UNKNOWN_TYPE
from medline_converter.core.ir import FieldTranslation

# ---------------------------------------------------------------------------
# Field table: MEDLINE tag → canonical field
# ---------------------------------------------------------------------------

_FIELDS: Tuple[FieldTranslation, ...] = (
    FieldTranslation("PMID", "recNo"),
    FieldTranslation("AB  ", "abstract"),
    FieldTranslation("AID ", "doi"),
    FieldTranslation("FAU ", "authors", is_array=True),
    FieldTranslation("DP  ", "date"),
    FieldTranslation("ISBN", "isbn"),
    FieldTranslation("JT  ", "journal"),
    FieldTranslation("LA  ", "language"),
    FieldTranslation("PG  ", "pages"),
    FieldTranslation("PT  ", "type"),
    FieldTranslation("PL  ", "address"),
    FieldTranslation("TI  ", "title"),
    FieldTranslation("VI  ", "volume"),
    FieldTranslation("OT  ", "tags", is_array=True),
)

# ---------------------------------------------------------------------------
# Type table: MEDLINE publication type → canonical type (order matters)
# ---------------------------------------------------------------------------

_TYPES: Tuple[Tuple[str, str], ...] = (
    ("CASE REPORTS", "case"),
    ("CLASSICAL ARTICLE", "classicalWork"),
    ("DICTIONARY", "dictionary"),
    ("JOURNAL ARTICLE", "journalArticle"),
    ("LEGAL CASES", "legalRuleOrRegulation"),
    ("LEGISLATION", "legalRuleOrRegulation"),
    ("LETTER", "personalCommunication"),
    ("NEWSPAPER ARTICLE", "newspaperArticle"),
    ("TECHNICAL REPORT", "report"),
    ("VIDEO-AUDIO MEDIA", "filmOrBroadcast"),
    ("WEBCASTS", "web"),
)


def _first_label_per_type(types: Tuple[Tuple[str, str], ...]) -> Dict[str, str]:
    """Invert the type table keeping the first label registered per type."""
    reverse: Dict[str, str] = {}
    for label, type_tag in types:
        reverse.setdefault(type_tag, label)
    return reverse


FIELDS_BY_TAG: Mapping[str, FieldTranslation] = MappingProxyType(
    {entry.tag: entry for entry in _FIELDS}
)
FIELDS_BY_NAME: Mapping[str, FieldTranslation] = MappingProxyType(
    {entry.name: entry for entry in _FIELDS}
)
TYPES_BY_LABEL: Mapping[str, str] = MappingProxyType(dict(_TYPES))
LABELS_BY_TYPE: Mapping[str, str] = MappingProxyType(_first_label_per_type(_TYPES))


def field_for_tag(tag: str) -> Optional[FieldTranslation]:
    """Return the field entry for a 4-character MEDLINE tag, or None."""
    return FIELDS_BY_TAG.get(tag)


def field_for_name(name: str) -> Optional[FieldTranslation]:
    """Return the field entry for a canonical field name, or None."""
    return FIELDS_BY_NAME.get(name)


def type_for_label(label: Optional[str]) -> str:
    """Map a MEDLINE publication type label to a canonical type tag.

    WHY: MEDLINE writes types as upper-case labels ("JOURNAL ARTICLE"),
    the canonical record uses camelCase tags ("journalArticle").

    RULES:
    - Exact, case-sensitive match against the type table
    - Unmapped, empty or missing labels return UNKNOWN_TYPE
    """
    if not label:
        return UNKNOWN_TYPE
    return TYPES_BY_LABEL.get(label, UNKNOWN_TYPE)


def label_for_type(type_tag: Optional[str], default_type: str) -> str:
    """Map a canonical type tag back to a MEDLINE label.

    WHY: Output must always carry a usable PT value, even for records
    whose type has no MEDLINE equivalent (or is "unknown").

    HOW: Reverse lookup of type_tag; on a miss, default_type as given.

    RULES:
    - legalRuleOrRegulation → "LEGAL CASES" (first registered label)
    - Unmapped, empty or missing type tags are written as default_type
    """
    if type_tag and type_tag in LABELS_BY_TYPE:
        return LABELS_BY_TYPE[type_tag]
    return default_type
