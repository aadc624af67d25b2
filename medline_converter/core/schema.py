"""JSON Schema for canonical records and validation of JSON input.

WHY: Records arriving as JSON (from another tool, a file, an API) must
have the canonical shape before the emitter touches them: values are
strings or lists of strings. Catching a nested object or a number here
gives the user a precise message instead of garbage in the .nbib file.

HOW: RECORD_SCHEMA is a draft-07 JSON Schema checked with jsonschema's
Draft7Validator. validate_records() accepts one record or a list and
reports the index of the first offending record.

RULES:
- Record: object; every value is a string or an array of strings
- Unknown keys are allowed (the formatter drops them)
- Input may be a single object or an array of objects
"""

from __future__ import annotations

from typing import Any, Dict, List

import jsonschema

from medline_converter.core.ir import Record

RECORD_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Canonical citation record",
    "type": "object",
    "additionalProperties": {
        "anyOf": [
            {"type": "string"},
            {"type": "array", "items": {"type": "string"}},
        ]
    },
}

_VALIDATOR = jsonschema.Draft7Validator(RECORD_SCHEMA)


class RecordValidationError(ValueError):
    """Raised when JSON input does not match RECORD_SCHEMA.

    RULES:
    - index is the position of the bad record (0 for a single object)
    - The jsonschema.ValidationError is chained as __cause__
    """

    def __init__(self, index: int, error: jsonschema.ValidationError) -> None:
        self.index = index
        path = "/".join(str(part) for part in error.absolute_path) or "<root>"
        super().__init__(
            "Record {} is invalid at {}: {}".format(index, path, error.message)
        )


def validate_records(data: Any) -> List[Record]:
    """Validate decoded JSON as one record or a list of records.

    Args:
        data: Result of json.load(s): a dict or a list of dicts.

    Returns:
        The records as a list.

    Raises:
        RecordValidationError: On the first record that fails the schema.
    """
    records = data if isinstance(data, list) else [data]
    for index, record in enumerate(records):
        try:
            _VALIDATOR.validate(record)
        except jsonschema.ValidationError as exc:
            raise RecordValidationError(index, exc) from exc
    return records
