"""
Validation and normalization helpers shared by the services.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional


class ValidationUtils:
    """
    Utility class for common validation operations.
    Helpers return cleaned values or None and leave error reporting to the caller,
    so a service can collect every problem before raising.
    """

    # Everything except digits and the decimal point is stripped from amounts
    NON_NUMERIC_PATTERN = re.compile(r"[^0-9.]")

    @staticmethod
    def is_blank(value: Any) -> bool:
        """True for None and for values whose string form is empty after trimming."""
        return value is None or str(value).strip() == ""

    @staticmethod
    def missing_fields(data: Dict[str, Any], required: Iterable[str]) -> List[str]:
        """
        List required fields that are absent or blank, in the order given.

        Args:
            data: Submitted field values
            required: Names of required fields

        Returns:
            Names of missing fields
        """
        return [field for field in required if ValidationUtils.is_blank(data.get(field))]

    @staticmethod
    def clean_text(value: Any) -> Optional[str]:
        """Trim a text value; blank values become None."""
        if ValidationUtils.is_blank(value):
            return None
        return str(value).strip()

    @staticmethod
    def normalize_amount(value: Any, scale: Optional[int] = None) -> Optional[Decimal]:
        """
        Normalize a client-supplied amount such as "$1,234.56".

        Non-digit, non-decimal-point characters are stripped before parsing.
        With a scale the amount is rounded half-up to that many decimal places
        before the positivity check, so the value checked is the value stored.

        Args:
            value: Raw amount as sent by the client
            scale: Decimal places kept by the destination column

        Returns:
            Positive Decimal, or None when the result is empty, unparsable or not > 0
        """
        if value is None or isinstance(value, bool):
            return None

        # Numbers from JSON bodies: format without exponent so stripping keeps the value
        raw = format(Decimal(str(value)), "f") if isinstance(value, (int, float)) else str(value)
        cleaned = ValidationUtils.NON_NUMERIC_PATTERN.sub("", raw)
        if not cleaned:
            return None

        try:
            amount = Decimal(cleaned)
            if scale is not None:
                amount = amount.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP)
        except InvalidOperation:
            return None

        if not amount.is_finite() or amount <= 0:
            return None
        return amount
