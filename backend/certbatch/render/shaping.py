"""
Text shaping - logical text to glyph-ready display order

Pillow draws strings left to right without contextual joining, so
right-to-left Arabic text is reshaped into presentation forms and put in
visual order before drawing. Text that is pure ASCII is returned as is.

Implementations:
- ReverseTextShaper: reshape, then reverse the whole string (default)
- BidiTextShaper: reshape, then apply the Unicode bidi algorithm, which
  keeps embedded digits and Latin runs in reading order
"""

from __future__ import annotations

import arabic_reshaper
from bidi.algorithm import get_display

from ..interfaces import ITextShaper

# Output length equals input length: no lam-alef ligatures, harakat kept,
# joiners put back by _keep_joiners.
_RESHAPER_CONFIG = {
    "delete_harakat": False,
    "support_ligatures": False,
}

ZWJ = "\u200d"


def _make_reshaper(ligatures: bool) -> arabic_reshaper.ArabicReshaper:
    configuration = dict(_RESHAPER_CONFIG)
    configuration["support_ligatures"] = ligatures
    return arabic_reshaper.ArabicReshaper(configuration=configuration)


def _keep_joiners(text: str, reshaped: str) -> str:
    """Re-insert the zero-width joiners the reshaper consumes while joining"""
    glyphs = iter(reshaped.replace(ZWJ, ""))
    return "".join(ZWJ if ch == ZWJ else next(glyphs, "") for ch in text)


class ReverseTextShaper(ITextShaper):
    """Contextual joining followed by full character reversal"""

    def __init__(self, ligatures: bool = False):
        self._reshaper = _make_reshaper(ligatures)
        self._ligatures = ligatures

    def shape(self, text: str) -> str:
        if text.isascii():
            return text
        shaped = self._reshaper.reshape(text)
        if ZWJ in text and not self._ligatures:
            shaped = _keep_joiners(text, shaped)
        return shaped[::-1]


class BidiTextShaper(ITextShaper):
    """Contextual joining followed by the Unicode bidi algorithm"""

    def __init__(self, ligatures: bool = True):
        self._reshaper = _make_reshaper(ligatures)

    def shape(self, text: str) -> str:
        if text.isascii():
            return text
        return get_display(self._reshaper.reshape(text))


SHAPERS: dict[str, type[ITextShaper]] = {
    "reverse": ReverseTextShaper,
    "bidi": BidiTextShaper,
}


def get_shaper(name: str = "reverse") -> ITextShaper:
    """Instantiate a shaper by name"""
    try:
        return SHAPERS[name]()
    except KeyError:
        raise ValueError(f"Unknown shaper '{name}', expected one of {sorted(SHAPERS)}") from None
