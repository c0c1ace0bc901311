"""
Data model layer - core data structures shared by every module

- Record / RecordSet: one input row keyed by column name
- FieldRegion / ScaledRegion: text placement in preview and native space
- RenderJob / EmailJob: self-contained per-record units of work
- JobOutcome / BatchReport: per-job results and batch aggregate
- EmailCredentials / AppConfig: persisted mail account settings
"""

from .credentials import AppConfig, EmailCredentials
from .job import (
    BatchKind,
    BatchReport,
    EmailJob,
    JobOutcome,
    JobStatus,
    RenderJob,
)
from .record import Record, RecordSet
from .region import FieldRegion, Point, ScaledRegion

__all__ = [
    "Record",
    "RecordSet",
    "Point",
    "FieldRegion",
    "ScaledRegion",
    "RenderJob",
    "EmailJob",
    "JobStatus",
    "JobOutcome",
    "BatchKind",
    "BatchReport",
    "EmailCredentials",
    "AppConfig",
]
