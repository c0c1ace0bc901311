"""
Module interface contracts - abstract interfaces between modules

Design principles:
1. Modules talk through interfaces, not concrete implementations
2. Each interface states its input and output types
3. Implementations can be swapped or mocked in tests

Usage:
    from certbatch.interfaces import ITextShaper

    class MyShaper(ITextShaper):
        def shape(self, text: str) -> str:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import BatchReport, EmailJob, RenderJob


# ============================================================================
# Rendering interfaces
# ============================================================================

class ITextShaper(ABC):
    """Text shaper - logical text to glyph-ready display order"""

    @abstractmethod
    def shape(self, text: str) -> str:
        """
        Shape one field value for drawing.

        Must be pure and total: never raises, empty input gives empty output.

        Args:
            text: Raw field text, possibly mixed-script

        Returns:
            Text ready to be drawn left to right
        """
        ...


class ICertificateRenderer(ABC):
    """Certificate renderer - composite one record onto the template"""

    @abstractmethod
    def render(self, job: RenderJob) -> Path:
        """
        Render one job and write the encoded image.

        Args:
            job: Self-contained render job

        Returns:
            Path of the written image

        Raises:
            DecodeError: Template bytes are not a decodable image
            LayoutError: Typeface could not be loaded
            OutputIOError: Output directory or file could not be written
        """
        ...


# ============================================================================
# Mail interface
# ============================================================================

class IEmailDispatcher(ABC):
    """Email dispatcher - mail one generated certificate"""

    @abstractmethod
    def send(self, job: EmailJob) -> None:
        """
        Attach job.filename and send it to job.to.

        Raises:
            OutputIOError: Attachment could not be read
            DataError: Address malformed or credentials not configured
            TransportError: Relay authentication or delivery failed
        """
        ...


# ============================================================================
# Batch management interface
# ============================================================================

class IBatchManager(ABC):
    """Batch manager"""

    @abstractmethod
    def get_report(self, batch_id: str) -> BatchReport | None:
        """Get a finished batch report"""
        ...

    @abstractmethod
    def list_reports(self, limit: int = 100) -> list[BatchReport]:
        """List known batch reports, newest first"""
        ...


# ============================================================================
# Exceptions
# ============================================================================

class CertBatchError(Exception):
    """Base exception"""
    pass


class DecodeError(CertBatchError):
    """Template image could not be decoded"""
    pass


class OutputIOError(CertBatchError):
    """Filesystem read/write failure"""
    pass


class LayoutError(CertBatchError):
    """Typeface or text layout initialisation failure"""
    pass


class TransportError(CertBatchError):
    """Mail relay authentication or delivery failure"""
    pass


class DataError(CertBatchError):
    """Record data unusable for the requested operation"""
    pass
