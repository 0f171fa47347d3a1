import pytest

from src.workforce.workforce.common.validators import require_int, require_month_year
from src.workforce.workforce.core.exceptions import ValidationError


def test_require_int_parses_query_strings():
    assert require_int("7", "month") == 7


@pytest.mark.parametrize("value", [None, "", "x", "1.5"])
def test_require_int_rejects_non_integers(value):
    with pytest.raises(ValidationError):
        require_int(value, "month")


def test_month_year_ranges():
    assert require_month_year("1", "2025") == (1, 2025)
    with pytest.raises(ValidationError, match="month"):
        require_month_year(13, 2025)
    with pytest.raises(ValidationError, match="year"):
        require_month_year(1, 1900)
