"""Unit tests for PersonName parsing."""

import pytest

from atlas.domain.value import PersonName


class TestPersonNameParse:
    """Tests for PersonName.parse()."""

    @pytest.mark.parametrize(
        "full_name,first,last",
        [
            ("Ann Lee", "Ann", "Lee"),
            ("Madonna", "Madonna", ""),
            ("  Mary  Ann   Smith ", "Mary", "Ann   Smith"),
            ("Jean-Luc\tPicard", "Jean-Luc", "Picard"),
            (None, "Unknown", ""),
            ("", "Unknown", ""),
            ("   ", "Unknown", ""),
        ],
    )
    def test_parse(self, full_name, first, last):
        """Name splits on the first whitespace run into at most two parts."""
        name = PersonName.parse(full_name)

        assert name.first_name == first
        assert name.last_name == last

    def test_full_name(self):
        """Display name joins both parts with a space."""
        assert PersonName(first_name="Ann", last_name="Lee").full_name == "Ann Lee"
