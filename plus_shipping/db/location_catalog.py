"""
JSON-backed catalog of the distribution-center locations.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from plus_shipping.core.config import get_settings
from plus_shipping.db.schemas import LocationRecord, LocationsFile
from plus_shipping.domain.models import Location
from plus_shipping.domain.value_objects import PhoneNumber, PostalCode, Prefecture
from plus_shipping.utils.error_handler import ConfigurationException, NotFoundException

logger = logging.getLogger(__name__)

_locations_adapter = TypeAdapter(LocationsFile)


class JsonLocationRepository:
    """
    Loads locations from ``locations.json``, preserving file order.

    Any invalid record fails the whole load.
    """

    def __init__(self, data_path: Optional[str | Path] = None):
        self.data_path = Path(data_path or get_settings().LOCATIONS_DATA_PATH)
        self._cache: Optional[List[Location]] = None

    def find_all(self) -> List[Location]:
        if self._cache is None:
            self._cache = self._load()
        return list(self._cache)

    def find_by_area(self, area: str) -> Location:
        """
        Get the location for an area key.

        Raises:
            NotFoundException: If the catalog has no such area
        """
        locations = self.find_all()
        for location in locations:
            if location.area == area:
                return location
        raise NotFoundException(
            f"Location not found for area: {area}",
            resource="location",
            key=area,
            available=[location.area for location in locations],
        )

    def _load(self) -> List[Location]:
        if not self.data_path.is_file():
            raise ConfigurationException(f"Locations file not found: {self.data_path}", path=str(self.data_path))

        try:
            raw = json.loads(self.data_path.read_text(encoding="utf-8"))
            records = _locations_adapter.validate_python(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationException(
                f"Invalid JSON in locations file {self.data_path}: {e}", path=str(self.data_path)
            ) from e
        except ValidationError as e:
            raise ConfigurationException(
                f"Invalid locations file {self.data_path}: {e}", path=str(self.data_path)
            ) from e

        locations = [self._to_domain(record) for record in records]
        logger.debug(f"Loaded {len(locations)} locations from {self.data_path}")
        return locations

    @staticmethod
    def _to_domain(record: LocationRecord) -> Location:
        return Location.create(
            area=record.area,
            name=record.name,
            postal_code=PostalCode.from_value(record.zip),
            prefecture=Prefecture.from_value(record.province),
            city=record.city,
            address1=record.address1,
            address2=record.address2,
            phone=PhoneNumber.from_value(record.phone),
        )
