"""
PhoneNumber value object for Japanese landline and mobile numbers.
"""

import re
from dataclasses import dataclass

from plus_shipping.utils.error_handler import ValidationException

_DIGITS = re.compile(r"[0-9]+")

# Landline area codes written with two digits (Tokyo, Chiba/Ibaraki, Osaka)
TWO_DIGIT_AREA_CODES = ("03", "04", "06")
MOBILE_PREFIXES = ("070", "080", "090")


@dataclass(frozen=True)
class PhoneNumber:
    """
    Immutable phone number stored in canonical hyphenated form.

    - 11 digits: ``NNN-NNNN-NNNN`` (mobile)
    - 10 digits with a two-digit area code: ``NN-NNNN-NNNN``
    - other 10 digits: ``NNN-NNN-NNNN``
    """

    value: str

    def __post_init__(self) -> None:
        raw = self.value
        if not isinstance(raw, str) or not raw.strip():
            raise self._invalid("Invalid phone number format: empty string", raw)

        digits = raw.replace("-", "")

        if not _DIGITS.fullmatch(digits):
            raise self._invalid("Invalid phone number format: must contain only digits", raw)

        if len(digits) not in (10, 11):
            raise self._invalid("Invalid phone number format: must be 10 or 11 digits", raw)

        if not digits.startswith("0"):
            raise self._invalid("Invalid phone number format: must start with 0", raw)

        object.__setattr__(self, "value", self._normalize(digits))

    @staticmethod
    def _invalid(message: str, raw) -> ValidationException:
        return ValidationException(
            message,
            field="phone",
            invalid_value=raw,
            expected_format="03-1234-5678 / 090-1234-5678",
        )

    @staticmethod
    def _normalize(digits: str) -> str:
        if len(digits) == 11:
            return f"{digits[:3]}-{digits[3:7]}-{digits[7:]}"
        if digits[:2] in TWO_DIGIT_AREA_CODES:
            return f"{digits[:2]}-{digits[2:6]}-{digits[6:]}"
        return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"

    @classmethod
    def from_value(cls, raw: str) -> "PhoneNumber":
        """Create a PhoneNumber from input with or without hyphens."""
        return cls(raw)

    @property
    def is_mobile(self) -> bool:
        return self.value.startswith(MOBILE_PREFIXES)

    def __str__(self) -> str:
        return self.value
