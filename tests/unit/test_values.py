"""
Unit tests for the value → text conversion used by the builder.
"""

from datetime import date, datetime, time
from enum import Enum

import pytest

from fluent_xml.values import stringify


class Fruit(Enum):
    APPLE = 1
    BANANA = 2


class TestStringify:
    """Test suite for stringify()."""

    def test_booleans_are_lowercase(self):
        """Should write booleans as XML booleans."""
        assert stringify(False) == 'false'
        assert stringify(True) == 'true'

    def test_integers(self):
        """Should write integers in plain decimal form."""
        assert stringify(2) == '2'
        assert stringify(-15) == '-15'

    def test_floats_use_shortest_round_trip_form(self):
        """Should keep the decimal point for whole floats."""
        assert stringify(1.0) == '1.0'
        assert stringify(13.37) == '13.37'

    def test_enum_uses_member_name(self):
        """Should write the member name, not the value."""
        assert stringify(Fruit.BANANA) == 'BANANA'

    def test_dates_use_iso_format(self):
        """Should write dates and times as ISO-8601."""
        assert stringify(date(2024, 1, 2)) == '2024-01-02'
        assert stringify(datetime(2024, 1, 2, 3, 4, 5)) == '2024-01-02T03:04:05'
        assert stringify(time(12, 30)) == '12:30:00'

    def test_strings_pass_through(self):
        """Should return strings unchanged."""
        assert stringify("it's amazing.") == "it's amazing."

    def test_none_is_rejected(self):
        """Should refuse None instead of writing 'None'."""
        with pytest.raises(TypeError):
            stringify(None)
