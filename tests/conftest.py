"""Shared test fixtures for the medline_converter test suite.

WHY: Parser, emitter, CLI and fetch tests all need the same realistic
MEDLINE export and the same in-memory destination. Centralizing them
here avoids duplication and keeps every module testing the same data.

HOW: SAMPLE_NBIB is a two-record PubMed export with wrapped abstracts,
repeated author lines and tags outside the field table. Fixtures expose
it as LF text, CRLF text and UTF-8 bytes. RecordingDestination captures
writes and close() calls for emitter assertions.

RULES:
- SAMPLE_NBIB uses LF line endings; the CRLF fixture is derived from it
- Expected records are spelled out in full, not derived from the parser
"""

from typing import Any, Dict, List

import pytest


SAMPLE_NBIB = (
    "PMID- 280219\n"
    "OWN - NLM\n"
    "STAT- MEDLINE\n"
    "DA  - 19780127\n"
    "IS  - 0077-8923 (Print)\n"
    "VI  - 299\n"
    "DP  - 1977 Sep 30\n"
    "TI  - An anthropological perspective on the evolution and lateralization of the\n"
    "      brain.\n"
    "PG  - 424-47\n"
    "AB  - The purpose of this paper is to examine the evolution of brain\n"
    "      lateralization from an anthropological perspective. The next section,\n"
    "      concerned with handedness, reviews the evidence within and across cultures.\n"
    "FAU - Dawson, J L\n"
    "AU  - Dawson JL\n"
    "LA  - eng\n"
    "PT  - Journal Article\n"
    "PL  - UNITED STATES\n"
    "TA  - Ann N Y Acad Sci\n"
    "JT  - Annals of the New York Academy of Sciences\n"
    "AID - 10.1111/j.1749-6632.1977.tb41927.x [doi]\n"
    "SO  - Ann N Y Acad Sci. 1977 Sep 30;299:424-47.\n"
    "\n"
    "PMID- 31415926\n"
    "OWN - NLM\n"
    "TI  - Letter to the editor regarding sample sizes.\n"
    "FAU - Smith, Anna\n"
    "FAU - Jones, Bartholomew\n"
    "FAU - O'Neill, Ciara\n"
    "LA  - eng\n"
    "PT  - LETTER\n"
    "OT  - statistics\n"
    "OT  - sample size\n"
    "JT  - The Lancet\n"
)

SAMPLE_FIRST_ABSTRACT = (
    "The purpose of this paper is to examine the evolution of brain "
    "lateralization from an anthropological perspective. The next section, "
    "concerned with handedness, reviews the evidence within and across cultures."
)

SAMPLE_RECORDS: List[Dict[str, Any]] = [
    {
        "recNo": "280219",
        "volume": "299",
        "date": "1977 Sep 30",
        "title": "An anthropological perspective on the evolution and "
                 "lateralization of the brain.",
        "pages": "424-47",
        "abstract": SAMPLE_FIRST_ABSTRACT,
        "authors": ["Dawson, J L"],
        "language": "eng",
        "type": "unknown",
        "address": "UNITED STATES",
        "journal": "Annals of the New York Academy of Sciences",
        "doi": "10.1111/j.1749-6632.1977.tb41927.x [doi]",
    },
    {
        "recNo": "31415926",
        "title": "Letter to the editor regarding sample sizes.",
        "authors": ["Smith, Anna", "Jones, Bartholomew", "O'Neill, Ciara"],
        "language": "eng",
        "type": "personalCommunication",
        "tags": ["statistics", "sample size"],
        "journal": "The Lancet",
    },
]


class RecordingDestination:
    """In-memory destination recording every write and close call."""

    def __init__(self) -> None:
        self.writes: List[str] = []
        self.close_calls = 0

    def write(self, text: str) -> None:
        if self.close_calls:
            raise AssertionError("write() after close()")
        self.writes.append(text)

    def close(self) -> None:
        self.close_calls += 1

    @property
    def text(self) -> str:
        return "".join(self.writes)


@pytest.fixture
def sample_text():
    """Two-record MEDLINE export with LF line endings."""
    return SAMPLE_NBIB


@pytest.fixture
def sample_text_crlf():
    """The same export with CRLF line endings."""
    return SAMPLE_NBIB.replace("\n", "\r\n")


@pytest.fixture
def sample_bytes():
    """The export as UTF-8 bytes."""
    return SAMPLE_NBIB.encode("utf-8")


@pytest.fixture
def sample_records():
    """Records the parser must produce from SAMPLE_NBIB."""
    return [dict(record) for record in SAMPLE_RECORDS]


@pytest.fixture
def destination():
    """A fresh RecordingDestination."""
    return RecordingDestination()
