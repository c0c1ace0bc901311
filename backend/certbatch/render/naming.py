"""
Output namer - file name from the two identifying record fields

The first two columns by position identify a record:
    ("42", "Amina", ...) -> "42-Amina.png"

No path-character sanitisation is applied. With the default "overwrite"
strategy two records sharing both identifying values map to the same
file; the "suffix" strategy appends -2, -3, ... to later duplicates.
"""

from __future__ import annotations

import logging
from collections import Counter

from ..config import get_config
from ..interfaces import DataError
from ..models import Record

logger = logging.getLogger(__name__)

STRATEGIES = ("overwrite", "suffix")


class OutputNamer:
    """Deterministic output naming"""

    def __init__(self, strategy: str | None = None, extension: str = "png"):
        strategy = strategy or get_config().output.naming
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown naming strategy '{strategy}', expected one of {STRATEGIES}")
        self.strategy = strategy
        self.extension = extension

    def base_name(self, record: Record) -> str:
        values = list(record.values())
        if len(values) < 2:
            raise DataError(
                f"Record needs two identifying fields to be named, got {len(values)}"
            )
        return f"{values[0]}-{values[1]}"

    def name(self, record: Record) -> str:
        """Name for a single record under the default contract"""
        return f"{self.base_name(record)}.{self.extension}"

    def plan(self, records: list[Record]) -> list[str]:
        """Names for a whole batch, in record order"""
        names = [self.base_name(record) for record in records]

        duplicates = [n for n, count in Counter(names).items() if count > 1]
        if duplicates and self.strategy == "overwrite":
            logger.warning(f"Records share output names and will overwrite each other: {duplicates}")

        if self.strategy == "overwrite":
            return [f"{n}.{self.extension}" for n in names]

        seen: Counter[str] = Counter()
        taken = set(names)
        planned = []
        for n in names:
            seen[n] += 1
            candidate = n
            if seen[n] > 1:
                suffix = seen[n]
                candidate = f"{n}-{suffix}"
                while candidate in taken:
                    suffix += 1
                    candidate = f"{n}-{suffix}"
                seen[n] = suffix
                taken.add(candidate)
            planned.append(f"{candidate}.{self.extension}")
        return planned
