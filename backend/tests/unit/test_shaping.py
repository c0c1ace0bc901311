"""
Text shaping unit tests
"""

import unicodedata

import arabic_reshaper
import pytest

from certbatch.render import BidiTextShaper, ReverseTextShaper, get_shaper


class TestReverseTextShaper:
    """Default shaper tests"""

    def test_ascii_unchanged(self):
        assert ReverseTextShaper().shape("Omar Khaled 42") == "Omar Khaled 42"

    def test_empty(self):
        assert ReverseTextShaper().shape("") == ""

    def test_joined_and_reversed(self):
        """ain-meem-reh becomes final reh, medial meem, initial ain"""
        assert ReverseTextShaper().shape("عمر") == "\ufeae\ufee4\ufecb"

    def test_length_preserved(self):
        for text in ("سلام", "أمينة", "شهادة حضور", "Omar عمر", "\u0639\u200d\u0645\u0631"):
            assert len(ReverseTextShaper().shape(text)) == len(text)

    def test_joiner_kept_in_place(self):
        """ZWJ survives between the joined ain and meem"""
        assert ReverseTextShaper().shape("\u0639\u200d\u0645\u0631") == "\ufeae\ufee4\u200d\ufecb"

    def test_reversed_relative_to_logical_order(self):
        text = "شهادة حضور"
        reshaper = arabic_reshaper.ArabicReshaper(
            configuration={"delete_harakat": False, "support_ligatures": False}
        )
        assert ReverseTextShaper().shape(text) == reshaper.reshape(text)[::-1]

    def test_presentation_forms(self):
        shaped = ReverseTextShaper().shape("لينا")
        assert all("ARABIC LETTER" in unicodedata.name(ch) and "FORM" in unicodedata.name(ch) for ch in shaped)

    def test_deterministic(self):
        shaper = ReverseTextShaper()
        assert shaper.shape("أمينة") == shaper.shape("أمينة")

    def test_digits_reversed(self):
        """Full reversal flips embedded digit runs"""
        assert "24" in ReverseTextShaper().shape("عمر 42")


class TestBidiTextShaper:
    """Bidi shaper tests"""

    def test_ascii_unchanged(self):
        assert BidiTextShaper().shape("Lina") == "Lina"

    def test_digits_keep_order(self):
        assert "42" in BidiTextShaper().shape("عمر 42")


class TestGetShaper:

    def test_by_name(self):
        assert isinstance(get_shaper("reverse"), ReverseTextShaper)
        assert isinstance(get_shaper("bidi"), BidiTextShaper)

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_shaper("harfbuzz")
