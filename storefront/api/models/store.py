"""
Store Models
Pydantic models for merchant store endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StoreCreate(BaseModel):
    """Merchant store creation request."""

    code: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_-]+$",
                      description="Unique store code")
    name: str = Field(..., min_length=1, max_length=255, description="Store name")
    email: Optional[str] = Field(None, max_length=255, description="Contact email")
    domain_name: Optional[str] = Field(None, max_length=255)
    default_language: Optional[str] = Field(None, max_length=10)
    currency: Optional[str] = Field(None, min_length=3, max_length=3, description="ISO 4217 code")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "DEFAULT",
                "name": "Default store",
                "email": "admin@example.com",
                "currency": "USD",
            }
        }
    )


class StoreUpdate(BaseModel):
    """Merchant store update request. Omitted fields are unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    domain_name: Optional[str] = Field(None, max_length=255)
    default_language: Optional[str] = Field(None, max_length=10)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)


class StoreResponse(BaseModel):
    """Merchant store."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    email: Optional[str] = None
    domain_name: Optional[str] = None
    default_language: str
    currency: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StoreList(BaseModel):
    """Page of merchant stores."""

    items: List[StoreResponse]
    total: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)
