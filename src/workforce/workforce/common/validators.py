from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_int(value: Any, field_name: str, *, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field_name} must be at least {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum}")
    return number


def require_month_year(month: Any, year: Any) -> tuple[int, int]:
    return (
        require_int(month, "month", minimum=1, maximum=12),
        require_int(year, "year", minimum=1970, maximum=9999),
    )
