"""
Render module - from layout and record to certificate image

Submodules:
- scaler: preview-to-native coordinate mapping
- shaping: right-to-left text shaping
- renderer: per-record compositing and PNG output
- naming: output file naming
"""

from .naming import OutputNamer
from .renderer import CertificateRenderer
from .scaler import CoordinateScaler
from .shaping import BidiTextShaper, ReverseTextShaper, get_shaper

__all__ = [
    "CoordinateScaler",
    "ReverseTextShaper",
    "BidiTextShaper",
    "get_shaper",
    "CertificateRenderer",
    "OutputNamer",
]
