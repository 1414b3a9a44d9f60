"""
Pydantic models for the on-disk shop registry and location catalog.

These validate the raw YAML/JSON structure before it is mapped onto the
domain model, which applies the business rules.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class EnvironmentRecord(BaseModel):
    """Cluster coordinates of one environment in shops.yaml."""

    namespace: str
    context: str
    db_name: str
    db_config_map: str
    db_secret: str


class CredentialsRecord(BaseModel):
    """Carrier detail ids; missing or null values mean not provisioned."""

    sagawa_detail_id: int = 0
    yamato_detail_id: int = 0
    japan_post_detail_id: int = 0

    @field_validator("sagawa_detail_id", "yamato_detail_id", "japan_post_detail_id", mode="before")
    @classmethod
    def default_missing_ids(cls, v):
        return 0 if v is None else v


class ShopRecord(BaseModel):
    """One entry under ``shops:``."""

    shopify_shop_id: str
    store_id: int
    environments: Dict[str, EnvironmentRecord] = Field(default_factory=dict)
    credentials: Optional[CredentialsRecord] = None


class ShopsFile(BaseModel):
    """Top-level structure of shops.yaml."""

    shops: Dict[str, ShopRecord] = Field(default_factory=dict)

    @field_validator("shops", mode="before")
    @classmethod
    def empty_shops(cls, v):
        return v or {}


class LocationRecord(BaseModel):
    """One item of locations.json (Shopify location export format)."""

    area: str
    name: str
    address1: str
    address2: str = ""
    city: str
    province: str
    province_code: Optional[str] = None
    zip: str
    country_code: str = "JP"
    phone: str

    @field_validator("address2", mode="before")
    @classmethod
    def empty_building(cls, v):
        return v or ""


LocationsFile = List[LocationRecord]
