from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

_DIGITS = re.compile(r"^\d+$")


def iso_today() -> str:
    return date.today().isoformat()


def is_digits(value: Any) -> bool:
    return bool(_DIGITS.match(str(value if value is not None else "")))


def is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def image_url(path: Optional[str], uploads_base_url: str) -> Optional[str]:
    # Backend stores bare file names; absolute URLs pass through.
    if not path:
        return None
    if str(path).startswith("http"):
        return str(path)
    return f"{uploads_base_url}{path}"


def short_date(value: Optional[str]) -> str:
    if not value:
        return "-"
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return str(value)


def plain_number(value: Optional[float]) -> str:
    # 2999.0 -> "2999", 2999.5 -> "2999.5"; never rounds.
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
