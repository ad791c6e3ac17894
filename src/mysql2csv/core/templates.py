# src/mysql2csv/core/templates.py
"""Output template parsing.

An output template names where result sets are written:

- "" (empty): standard output
- "results.csv": one static file shared by every result set
- "results-%d.csv" / "results-%03d.csv": one file per result set, with the
  zero-based sequence index substituted (zero-padded to N digits for %0Nd)

Only %d and %0Nd are interpreted. Every other character, including other
%-sequences, is copied into the filename verbatim.

creates_multiple_files() is the single fan-out predicate. Both the sink
resolver and the run loop's schema consistency check call it, so the two
can never disagree about whether output is split per result set.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mysql2csv.contracts.errors import InvalidTemplateError

__all__ = [
    "OutputTemplate",
    "PLACEHOLDER_PATTERN",
    "creates_multiple_files",
]

# %d, or %0Nd with N one or more digits
PLACEHOLDER_PATTERN = re.compile(r"%(?:0(?P<width>\d+))?d")


def creates_multiple_files(template: str) -> bool:
    """Return True if the template fans out to one file per result set.

    Examples:
        >>> creates_multiple_files("out-%03d.csv")
        True
        >>> creates_multiple_files("out.csv")
        False
        >>> creates_multiple_files("")
        False
    """
    return PLACEHOLDER_PATTERN.search(template) is not None


@dataclass(frozen=True, slots=True)
class OutputTemplate:
    """Validated output template.

    Use OutputTemplate.parse() to construct; it rejects templates with more
    than one counter placeholder.
    """

    raw: str
    width: int | None = None

    @classmethod
    def parse(cls, template: str) -> OutputTemplate:
        """Validate a template string.

        Raises:
            InvalidTemplateError: If the template holds more than one placeholder
        """
        matches = list(PLACEHOLDER_PATTERN.finditer(template))
        if len(matches) > 1:
            raise InvalidTemplateError(
                template,
                f"expected at most one %d or %0Nd placeholder, found {len(matches)}",
            )
        width = None
        if matches and matches[0].group("width") is not None:
            width = int(matches[0].group("width"))
        return cls(raw=template, width=width)

    @property
    def is_stdout(self) -> bool:
        return self.raw == ""

    @property
    def is_indexed(self) -> bool:
        return creates_multiple_files(self.raw)

    def filename(self, index: int) -> str:
        """Resolve the filename for a sequence index.

        Static templates return the template unchanged for every index.

        Raises:
            InvalidTemplateError: If the template is empty (stdout has no filename)
        """
        if index < 0:
            raise ValueError(f"Sequence index must be non-negative, got {index}")
        if self.is_stdout:
            raise InvalidTemplateError(self.raw, "an empty template writes to stdout and has no filename")
        if not self.is_indexed:
            return self.raw

        numeral = str(index) if self.width is None else str(index).zfill(self.width)
        return PLACEHOLDER_PATTERN.sub(numeral, self.raw, count=1)
