"""
Record model - one input row keyed by column name
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# column name -> value, insertion order follows the header row
Record = dict[str, str]


class RecordSet(BaseModel):
    """Header row plus the records loaded under it"""
    columns: list[str] = Field(default_factory=list)
    rows: list[Record] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @classmethod
    def from_rows(cls, columns: list[str], values: list[list[str]]) -> RecordSet:
        """Build records from positional rows"""
        return cls(
            columns=list(columns),
            rows=[dict(zip(columns, row)) for row in values],
        )
