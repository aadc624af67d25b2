"""Abstract base for per-record formatters.

WHY: The emitter and the CLI write records in more than one text form
(MEDLINE blocks, JSON lines). A shared interface lets them treat every
formatter the same way.

HOW: BaseFormatter is an ABC with two requirements, a ``name`` property
and a ``format()`` method that turns one canonical record into text.

RULES:
- Every concrete formatter provides a display ``name`` and ``format()``
- ``format()`` never mutates the record it is given
- Record separators are the caller's concern, not the formatter's
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from medline_converter.core.ir import Record


class BaseFormatter(ABC):
    """One canonical record in, one text block out.

    Concrete formatters are looked up by key in formatters.FORMATTERS, so a
    new rendering only becomes reachable from the CLI once it is registered
    there.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'MEDLINE'."""

    @abstractmethod
    def format(self, record: Record) -> str:
        """Convert one canonical record into a text block.

        Args:
            record: The canonical record to render.

        Returns:
            The rendered text, ending with a newline.
        """
