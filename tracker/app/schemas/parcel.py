"""
Parcel Pydantic schemas.

Defines the records passed in and out of the parcel store.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator
from tracker.app.models.parcel_enums import ParcelStatus


def rfc3339_now() -> str:
    """Current UTC time as an RFC3339 string with second precision."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ParcelCreate(BaseModel):
    """Schema for a parcel that has not been stored yet."""
    client: int = Field(..., description="Opaque client identifier")
    status: str = Field(default=ParcelStatus.REGISTERED.value, description="Lifecycle status")
    address: str = Field(..., description="Delivery address")
    created_at: str = Field(default_factory=rfc3339_now, description="RFC3339 UTC creation time")

    @field_validator("status", mode="before")
    @classmethod
    def status_as_plain_string(cls, value):
        if isinstance(value, ParcelStatus):
            return value.value
        return value


class ParcelResponse(ParcelCreate):
    """Schema for a stored parcel."""
    number: int
    
    class Config:
        from_attributes = True
