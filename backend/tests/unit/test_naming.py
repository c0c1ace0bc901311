"""
Output namer unit tests
"""

import pytest

from certbatch.interfaces import DataError
from certbatch.render import OutputNamer


class TestOutputNamer:
    """Naming contract tests"""

    def test_first_two_fields(self):
        assert OutputNamer().name({"id": "42", "name": "Amina", "email": "a@x.com"}) == "42-Amina.png"

    def test_default_strategy_from_config(self):
        assert OutputNamer().strategy == "overwrite"

    def test_single_field_record(self):
        with pytest.raises(DataError):
            OutputNamer().name({"id": "42"})

    def test_no_sanitisation(self):
        assert OutputNamer().name({"a": "x y", "b": "عمر"}) == "x y-عمر.png"

    def test_overwrite_keeps_collisions(self):
        records = [{"id": "1", "name": "Omar"}, {"id": "1", "name": "Omar"}]
        assert OutputNamer("overwrite").plan(records) == ["1-Omar.png", "1-Omar.png"]

    def test_suffix_disambiguates(self):
        records = [
            {"id": "1", "name": "Omar"},
            {"id": "1", "name": "Omar"},
            {"id": "2", "name": "Lina"},
            {"id": "1", "name": "Omar"},
        ]
        assert OutputNamer("suffix").plan(records) == [
            "1-Omar.png",
            "1-Omar-2.png",
            "2-Lina.png",
            "1-Omar-3.png",
        ]

    def test_suffix_avoids_existing_names(self):
        records = [
            {"id": "1", "name": "Omar"},
            {"id": "1", "name": "Omar"},
            {"id": "1", "name": "Omar-2"},
        ]
        planned = OutputNamer("suffix").plan(records)
        assert len(set(planned)) == 3
        assert planned[2] == "1-Omar-2.png"

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            OutputNamer("random")
