"""
Carrier application status of a consignor.
"""

from enum import Enum

from plus_shipping.utils.error_handler import ValidationException


class ApplicationStatus(Enum):
    """
    Whether the shop's carrier contract for a consignor has been accepted.

    Only ``ACCEPTED`` consignors may be deployed.
    """

    ACCEPTED = "accepted"
    NOT_APPLIED = "not_applied"

    @classmethod
    def from_value(cls, raw: str) -> "ApplicationStatus":
        """
        Parse the literal status string.

        Raises:
            ValidationException: If the value is neither "accepted" nor "not_applied"
        """
        for status in cls:
            if status.value == raw:
                return status
        raise ValidationException(
            f'Invalid application status: {raw}. Must be "accepted" or "not_applied"',
            field="application_status",
            invalid_value=raw,
            expected_format="accepted | not_applied",
        )

    @classmethod
    def accepted(cls) -> "ApplicationStatus":
        return cls.ACCEPTED

    @classmethod
    def not_applied(cls) -> "ApplicationStatus":
        return cls.NOT_APPLIED

    @property
    def is_accepted(self) -> bool:
        return self is ApplicationStatus.ACCEPTED

    @property
    def is_not_applied(self) -> bool:
        return self is ApplicationStatus.NOT_APPLIED

    def can_deploy(self) -> bool:
        return self.is_accepted

    def __str__(self) -> str:
        return self.value
