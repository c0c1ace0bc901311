"""
Job models - per-record work units and batch results

RenderJob/EmailJob are plain frozen dataclasses so the template bytes and
the scaled region list travel by reference into every worker.
JobOutcome/BatchReport are pydantic models so reports can be persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from .credentials import EmailCredentials
from .record import Record
from .region import ScaledRegion


class JobStatus(str, Enum):
    """Settled job status"""
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class BatchKind(str, Enum):
    """What a batch does per record"""
    RENDER = "render"
    EMAIL = "email"


@dataclass(frozen=True)
class RenderJob:
    """Everything needed to render one certificate"""
    record: Record
    regions: list[ScaledRegion]
    template: bytes
    output_name: str
    font_size: float


@dataclass(frozen=True)
class EmailJob:
    """Everything needed to mail one generated certificate"""
    credentials: EmailCredentials
    filename: str
    to: str


class JobOutcome(BaseModel):
    """Tagged result of one job"""
    index: int
    output_name: str
    status: JobStatus
    output_path: Path | None = None
    recipient: str | None = None
    error_kind: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == JobStatus.SUCCEEDED


class BatchReport(BaseModel):
    """Aggregate of all job outcomes in one batch"""
    batch_id: str = Field(..., description="UUID")
    kind: BatchKind
    total: int = 0
    outcomes: list[JobOutcome] = Field(default_factory=list)

    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def ok(self) -> bool:
        return self.finished_at is not None and self.failed == 0

    def failures(self) -> list[JobOutcome]:
        """Failed outcomes in record order"""
        return sorted((o for o in self.outcomes if not o.ok), key=lambda o: o.index)

    def mark_finished(self) -> None:
        """Freeze outcome order and stamp the finish time"""
        self.outcomes.sort(key=lambda o: o.index)
        self.finished_at = datetime.now()

    def summary(self) -> str:
        return f"{self.kind.value}: {self.succeeded}/{self.total} succeeded, {self.failed} failed"
