"""
PostalCode value object for Japanese postal codes.
"""

import re
from dataclasses import dataclass

from plus_shipping.utils.error_handler import ValidationException

_HYPHENATED = re.compile(r"[0-9]{3}-[0-9]{4}")
_BARE = re.compile(r"[0-9]{7}")


@dataclass(frozen=True)
class PostalCode:
    """
    Immutable seven-digit postal code, stored in canonical ``NNN-NNNN`` form.

    Accepts either ``"060-8588"`` or ``"0608588"``; a hyphen anywhere other
    than after the third digit is rejected.

    Example:
        >>> PostalCode.from_value("0608588").value
        '060-8588'
    """

    value: str

    def __post_init__(self) -> None:
        """Validate and normalize the postal code."""
        raw = self.value
        if not isinstance(raw, str) or not raw.strip():
            raise ValidationException(
                "Invalid postal code format: empty string",
                field="postal_code",
                invalid_value=raw,
                expected_format="123-4567",
            )

        if "-" in raw:
            if not _HYPHENATED.fullmatch(raw):
                raise ValidationException(
                    "Invalid postal code format: hyphen must be at position 3 (format: 123-4567)",
                    field="postal_code",
                    invalid_value=raw,
                    expected_format="123-4567",
                )
            digits = raw.replace("-", "")
        else:
            if not _BARE.fullmatch(raw):
                raise ValidationException(
                    "Invalid postal code format: must be 7 digits without hyphen",
                    field="postal_code",
                    invalid_value=raw,
                    expected_format="1234567",
                )
            digits = raw

        object.__setattr__(self, "value", f"{digits[:3]}-{digits[3:]}")

    @classmethod
    def from_value(cls, raw: str) -> "PostalCode":
        """Create a PostalCode from hyphenated or bare input."""
        return cls(raw)

    @property
    def digits(self) -> str:
        return self.value.replace("-", "")

    @property
    def region(self) -> str:
        """First three digits (regional sorting code)."""
        return self.value[:3]

    def __str__(self) -> str:
        return self.value
