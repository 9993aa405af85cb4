"""Persian and Arabic-Indic digit normalization."""
from __future__ import annotations

from typing import Optional

# Persian (U+06F0-U+06F9) then Arabic-Indic (U+0660-U+0669)
_DIGITS = str.maketrans("۰۱۲۳۴۵۶۷۸۹٠١٢٣٤٥٦٧٨٩", "01234567890123456789")


def normalize_numerals(value: Optional[str]) -> Optional[str]:
    """Replace Persian/Arabic-Indic digits with ASCII digits. None and "" pass through."""
    if not value:
        return value
    return value.translate(_DIGITS)
