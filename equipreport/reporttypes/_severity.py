# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from __future__ import annotations

from enum import Enum

from equipreport.errors import InvalidSeverity


class Severity(Enum):
    # declaration order is the listing order
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, text: str) -> Severity:
        """Converts user text to a Severity, ignoring case and surrounding whitespace.

        Both English and Spanish tokens are accepted (High/Alto, Medium/Medio, Low/Bajo).

        Args:
            text (str): The text to convert.

        Returns:
            Severity: The matching severity.

        Raises:
            InvalidSeverity: If the text does not name a severity.
        """
        normalized = (text or "").strip().casefold()
        try:
            return _TOKENS[normalized]
        except KeyError:
            raise InvalidSeverity(f"Invalid severity: {text!r}. Use Alto/Medio/Bajo") from None

    @property
    def display(self) -> str:
        return _DISPLAY[self]

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.display


_ORDER = list(Severity)

_DISPLAY = {
    Severity.HIGH: "Alto",
    Severity.MEDIUM: "Medio",
    Severity.LOW: "Bajo",
}

_TOKENS = {
    "alto": Severity.HIGH,
    "high": Severity.HIGH,
    "medio": Severity.MEDIUM,
    "medium": Severity.MEDIUM,
    "bajo": Severity.LOW,
    "low": Severity.LOW,
}
