"""
Batch manager - launch, track and persist batches

Responsibilities:
1. Scale the field layout once and launch render batches
2. Launch send-all email batches
3. Track handles by batch id and persist finished reports

Test points:
- test_generate_persists_report
- test_get_report_from_disk
- test_list_reports
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..config import get_config
from ..interfaces import IBatchManager
from ..models import BatchReport, EmailCredentials, FieldRegion, RecordSet
from ..render import CoordinateScaler
from .batch import BatchEngine, BatchHandle

logger = logging.getLogger(__name__)


class BatchManager(IBatchManager):
    """Batch manager implementation"""

    def __init__(self, engine: BatchEngine | None = None):
        self.config = get_config()
        self.engine = engine or BatchEngine()
        self.engine.on_finished.append(self._persist_report)
        self._handles: dict[str, BatchHandle] = {}  # in-memory cache

    def generate(
        self,
        record_set: RecordSet,
        regions: list[FieldRegion],
        template: bytes,
        font_size: float | None = None,
        scale_factor: float | None = None,
    ) -> BatchHandle:
        """Render every record; regions are given in preview space"""
        scaled = CoordinateScaler(scale_factor).scale(regions)
        handle = self.engine.launch_render(record_set.rows, scaled, template, font_size)
        self._handles[handle.batch_id] = handle
        return handle

    def send_all(
        self,
        record_set: RecordSet,
        credentials: EmailCredentials,
        email_column: str | None = None,
    ) -> BatchHandle:
        """Mail every record's certificate"""
        handle = self.engine.launch_email(record_set.rows, credentials, email_column)
        self._handles[handle.batch_id] = handle
        return handle

    def get_handle(self, batch_id: str) -> BatchHandle | None:
        return self._handles.get(batch_id)

    def get_report(self, batch_id: str) -> BatchReport | None:
        """Finished report; cache first, then disk"""
        handle = self._handles.get(batch_id)
        if handle:
            return handle.report()
        return self._load_report(batch_id)

    def list_reports(self, limit: int = 100) -> list[BatchReport]:
        """Finished reports known in memory or on disk, newest first"""
        reports: dict[str, BatchReport] = {}
        batches_dir = self.config.storage_dir / "batches"
        if batches_dir.exists():
            for batch_dir in batches_dir.iterdir():
                report = self._load_report(batch_dir.name)
                if report:
                    reports[report.batch_id] = report
        for batch_id, handle in self._handles.items():
            report = handle.report()
            if report:
                reports[batch_id] = report

        ordered = sorted(reports.values(), key=lambda r: r.started_at, reverse=True)
        return ordered[:limit]

    def _persist_report(self, report: BatchReport) -> Path:
        batch_dir = self.config.get_batch_dir(report.batch_id)
        batch_dir.mkdir(parents=True, exist_ok=True)

        report_file = batch_dir / "report.json"
        with open(report_file, "w", encoding="utf-8") as f:
            json.dump(report.model_dump(mode="json"), f, ensure_ascii=False, indent=2, default=str)
        logger.debug(f"[{report.batch_id}] report written to {report_file}")
        return report_file

    def _load_report(self, batch_id: str) -> BatchReport | None:
        report_file = self.config.get_batch_dir(batch_id) / "report.json"

        if not report_file.exists():
            return None

        try:
            with open(report_file, encoding="utf-8") as f:
                data = json.load(f)
            return BatchReport(**data)
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable batch report {report_file}: {e}")
            return None
