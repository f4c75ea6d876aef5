"""
Locations module data models.

Request models validate what clients send (JSON or multipart form fields);
Location is the stored record as returned to clients.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    field_validator,
)

_http_url = TypeAdapter(AnyHttpUrl)

CLEARABLE_FIELDS = frozenset({"phone", "email", "website", "business_hours"})


class LocationCategory(str, Enum):
    """Closed set of location categories."""

    RESTAURANT = "restaurant"
    STORE = "store"
    OFFICE = "office"
    SERVICE = "service"
    OTHER = "other"


class AccessDenialReason(str, Enum):
    """Why a scoped record was withheld from a request."""

    WRONG_TENANT = "WRONG_TENANT"
    WRONG_COMPONENT = "WRONG_COMPONENT"
    COMPONENT_SCOPE_REQUIRED = "COMPONENT_SCOPE_REQUIRED"


class BusinessHours(BaseModel):
    """Opening hours per weekday, free-form text (e.g. "9:00 AM - 5:00 PM")."""

    model_config = ConfigDict(extra="ignore")

    mon: Optional[str] = None
    tue: Optional[str] = None
    wed: Optional[str] = None
    thu: Optional[str] = None
    fri: Optional[str] = None
    sat: Optional[str] = None
    sun: Optional[str] = None


class LocationUpdate(BaseModel):
    """
    Partial update. Only the fields present in the request are applied.

    `image` holds a data URI, raw base64, or an existing image URL; it is
    also accepted as `image_url`.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(None, max_length=2048)
    category: Optional[LocationCategory] = None
    business_hours: Optional[BusinessHours] = None
    image: Optional[str] = Field(None, validation_alias=AliasChoices("image", "image_url"))

    @field_validator("phone", "email", "website", "image", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value else value

    @field_validator("website")
    @classmethod
    def _check_website(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        candidate = value if "://" in value else f"http://{value}"
        try:
            _http_url.validate_python(candidate)
        except ValueError:
            raise ValueError("Invalid URL format")
        return value

    @field_validator("business_hours", mode="before")
    @classmethod
    def _parse_business_hours(cls, value: Any) -> Any:
        # Multipart forms carry business hours as a JSON string
        if isinstance(value, str):
            if not value.strip():
                return None
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                raise ValueError("Business hours must be an object")
        return value

    def changes(self) -> dict[str, Any]:
        """
        Supplied record fields (excluding the image input), JSON-ready.

        Optional contact fields may be cleared with an empty value; required
        fields and the category ignore nulls.
        """
        fields = self.model_fields_set - {"image"}
        return {
            name: value
            for name, value in self.model_dump(mode="json", include=fields).items()
            if value is not None or name in CLEARABLE_FIELDS
        }


class LocationCreate(LocationUpdate):
    """Request body for creating a location."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    category: LocationCategory = LocationCategory.STORE

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> Any:
        return value or LocationCategory.STORE

    def fields(self) -> dict[str, Any]:
        """All record fields (excluding the image input), JSON-ready."""
        return self.model_dump(mode="json", exclude={"image"})


class Location(BaseModel):
    """A stored location record."""

    id: str
    name: str
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    category: LocationCategory = LocationCategory.STORE
    business_hours: Optional[BusinessHours] = None
    image_url: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    tenant_id: Optional[str] = None
    component_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_unscoped(self) -> bool:
        return self.tenant_id is None and self.component_id is None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
