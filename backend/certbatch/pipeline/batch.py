"""
Batch engine - fan records out across a worker pool

Responsibilities:
1. Build one self-contained job per record (render or email)
2. Run the jobs on a thread pool from a background coordinator thread
3. Turn every job into a tagged JobOutcome (failure isolation)
4. Expose a pollable handle; the caller never blocks unless it asks to

Shared inputs (template bytes, scaled regions) are passed by reference
and never mutated, so jobs need no locking.

Test points:
- test_every_record_runs_once
- test_failure_is_isolated
- test_handle_is_pollable
- test_email_batch_missing_column
- test_done_only_after_callbacks
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..config import get_config
from ..interfaces import (
    CertBatchError,
    DataError,
    ICertificateRenderer,
    IEmailDispatcher,
)
from ..mail import EmailDispatcher
from ..models import (
    BatchKind,
    BatchReport,
    EmailCredentials,
    EmailJob,
    JobOutcome,
    JobStatus,
    Record,
    RenderJob,
    ScaledRegion,
)
from ..render import CertificateRenderer, OutputNamer

logger = logging.getLogger(__name__)

# (index, output_name, work) -> JobOutcome once run
Task = tuple[int, str, Callable[[], JobOutcome]]


class BatchHandle:
    """Pollable view of an in-flight batch"""

    def __init__(self, report: BatchReport):
        self._report = report
        self._settled = 0
        self._done = threading.Event()

    @property
    def batch_id(self) -> str:
        return self._report.batch_id

    @property
    def kind(self) -> BatchKind:
        return self._report.kind

    def done(self) -> bool:
        """Non-blocking completion check"""
        return self._done.is_set()

    def progress(self) -> tuple[int, int]:
        """(settled, total)"""
        return self._settled, self._report.total

    def report(self) -> BatchReport | None:
        """The aggregate report, None while the batch is in flight"""
        return self._report if self.done() else None

    def wait(self, timeout: float | None = None) -> BatchReport | None:
        self._done.wait(timeout)
        return self.report()

    def _settle(self, outcome: JobOutcome) -> None:
        self._report.outcomes.append(outcome)
        self._settled += 1

    def _seal(self) -> BatchReport:
        """Freeze the outcomes; done() stays False until _release()"""
        self._report.mark_finished()
        return self._report

    def _release(self) -> None:
        self._done.set()


class BatchEngine:
    """Parallel per-record job execution"""

    def __init__(
        self,
        renderer: ICertificateRenderer | None = None,
        dispatcher: IEmailDispatcher | None = None,
        namer: OutputNamer | None = None,
        max_workers: int | None = None,
    ):
        config = get_config()
        self.renderer = renderer or CertificateRenderer()
        self.dispatcher = dispatcher or EmailDispatcher()
        self.namer = namer or OutputNamer()
        self.max_workers = max_workers or config.concurrency.resolve_workers()
        self.font_size = config.render.font_size
        self.email_column = config.mail.email_column
        self.on_finished: list[Callable[[BatchReport], None]] = []

    # ------------------------------------------------------------------
    # Render batch
    # ------------------------------------------------------------------

    def launch_render(
        self,
        records: list[Record],
        regions: list[ScaledRegion],
        template: bytes,
        font_size: float | None = None,
    ) -> BatchHandle:
        """Start rendering one certificate per record in the background"""
        size = font_size or self.font_size
        names = self.namer.plan(records)
        tasks: list[Task] = []
        for index, (record, name) in enumerate(zip(records, names)):
            job = RenderJob(
                record=dict(record),
                regions=regions,
                template=template,
                output_name=name,
                font_size=size,
            )
            tasks.append((index, name, self._render_work(index, job)))
        return self._launch(BatchKind.RENDER, tasks)

    def _render_work(self, index: int, job: RenderJob) -> Callable[[], JobOutcome]:
        def work() -> JobOutcome:
            path = self.renderer.render(job)
            return JobOutcome(
                index=index,
                output_name=job.output_name,
                status=JobStatus.SUCCEEDED,
                output_path=path,
            )
        return work

    # ------------------------------------------------------------------
    # Email batch
    # ------------------------------------------------------------------

    def launch_email(
        self,
        records: list[Record],
        credentials: EmailCredentials,
        email_column: str | None = None,
    ) -> BatchHandle:
        """Start mailing each record's generated certificate in the background"""
        column = email_column or self.email_column
        names = self.namer.plan(records)
        tasks: list[Task] = []
        for index, (record, name) in enumerate(zip(records, names)):
            tasks.append(
                (index, name, self._email_work(index, dict(record), name, credentials, column))
            )
        return self._launch(BatchKind.EMAIL, tasks)

    def _email_work(
        self,
        index: int,
        record: Record,
        filename: str,
        credentials: EmailCredentials,
        column: str,
    ) -> Callable[[], JobOutcome]:
        def work() -> JobOutcome:
            address = record.get(column)
            if not address:
                raise DataError(f"Record has no '{column}' value")
            self.dispatcher.send(EmailJob(credentials=credentials, filename=filename, to=address))
            return JobOutcome(
                index=index,
                output_name=filename,
                status=JobStatus.SUCCEEDED,
                recipient=address,
            )
        return work

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _launch(self, kind: BatchKind, tasks: list[Task]) -> BatchHandle:
        report = BatchReport(batch_id=str(uuid.uuid4()), kind=kind, total=len(tasks))
        handle = BatchHandle(report)
        coordinator = threading.Thread(
            target=self._run,
            args=(handle, tasks),
            name=f"batch-{report.batch_id[:8]}",
            daemon=True,
        )
        logger.info(f"[{report.batch_id}] launching {kind.value} batch of {len(tasks)} jobs")
        coordinator.start()
        return handle

    def _run(self, handle: BatchHandle, tasks: list[Task]) -> None:
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="certbatch"
        ) as pool:
            futures = [pool.submit(self._guard, index, name, work) for index, name, work in tasks]
            for future in as_completed(futures):
                handle._settle(future.result())

        report = handle._seal()
        logger.info(f"[{report.batch_id}] {report.summary()}")
        # Callbacks (report persistence) run before waiters are released
        try:
            for callback in self.on_finished:
                try:
                    callback(report)
                except Exception:
                    logger.exception(f"[{report.batch_id}] on_finished callback failed")
        finally:
            handle._release()

    @staticmethod
    def _guard(index: int, name: str, work: Callable[[], JobOutcome]) -> JobOutcome:
        """Run one job; any failure becomes a FAILED outcome"""
        try:
            return work()
        except CertBatchError as e:
            logger.warning(f"job {index} ({name}) failed: {type(e).__name__}: {e}")
            error_kind = type(e).__name__
            error = str(e)
        except Exception as e:
            logger.exception(f"job {index} ({name}) failed unexpectedly")
            error_kind = type(e).__name__
            error = str(e)
        return JobOutcome(
            index=index,
            output_name=name,
            status=JobStatus.FAILED,
            error_kind=error_kind,
            error=error,
        )
