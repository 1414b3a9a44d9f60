"""
Location: one of the fixed distribution centers a consignor ships from.
"""

from dataclasses import dataclass
from typing import Any

from plus_shipping.domain.value_objects import PhoneNumber, PostalCode, Prefecture
from plus_shipping.utils.error_handler import ValidationException

DISTRIBUTION_CENTER_MARKER = "配送センター"


@dataclass(frozen=True, eq=False)
class Location:
    """
    Immutable distribution-center address.

    Two locations are the same place when postal code and prefecture match;
    the display name and building line do not take part in equality.

    Attributes:
        area: Catalog key (e.g. "hokkaido", "kanto")
        name: Display name, always containing 配送センター
        postal_code: Canonical postal code
        prefecture: Prefecture
        city: City / ward
        address1: Street address
        address2: Building line, may be empty
        phone: Contact phone number
    """

    area: str
    name: str
    postal_code: PostalCode
    prefecture: Prefecture
    city: str
    address1: str
    address2: str
    phone: PhoneNumber

    def __post_init__(self) -> None:
        """Validate required fields and trim the text ones."""
        if not self.name or not self.name.strip():
            raise ValidationException("Location name must not be empty", field="name", invalid_value=self.name)

        if DISTRIBUTION_CENTER_MARKER not in self.name:
            raise ValidationException(
                f"Location name must include {DISTRIBUTION_CENTER_MARKER}", field="name", invalid_value=self.name
            )

        if not self.city or not self.city.strip():
            raise ValidationException("City must not be empty", field="city", invalid_value=self.city)

        if not self.address1 or not self.address1.strip():
            raise ValidationException("Address1 must not be empty", field="address1", invalid_value=self.address1)

        if not self.area or not self.area.strip():
            raise ValidationException("Area must not be empty", field="area", invalid_value=self.area)

        for attr in ("area", "name", "city", "address1"):
            object.__setattr__(self, attr, getattr(self, attr).strip())
        object.__setattr__(self, "address2", (self.address2 or "").strip())

    @classmethod
    def create(
        cls,
        area: str,
        name: str,
        postal_code: PostalCode,
        prefecture: Prefecture,
        city: str,
        address1: str,
        address2: str,
        phone: PhoneNumber,
    ) -> "Location":
        return cls(
            area=area,
            name=name,
            postal_code=postal_code,
            prefecture=prefecture,
            city=city,
            address1=address1,
            address2=address2,
            phone=phone,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self.postal_code == other.postal_code and self.prefecture == other.prefecture

    def __hash__(self) -> int:
        return hash((self.postal_code, self.prefecture))

    @property
    def full_address(self) -> str:
        """Prefecture + city + street, followed by the building line when present."""
        address = f"{self.prefecture}{self.city}{self.address1}"
        if self.address2:
            address += f" {self.address2}"
        return address

    def to_dict(self) -> dict[str, Any]:
        return {
            "area": self.area,
            "name": self.name,
            "postal_code": str(self.postal_code),
            "prefecture": str(self.prefecture),
            "city": self.city,
            "address1": self.address1,
            "address2": self.address2,
            "phone": str(self.phone),
        }
