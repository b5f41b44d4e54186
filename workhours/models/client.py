"""Client and activity model definitions.

An auto-entrepreneur runs a single business but may bill several clients or
several kinds of activity. Both are stored as the same record, told apart by
``kind``.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ClientKind(str, Enum):
    """Kinds of billing reference."""

    CLIENT = "client"
    ACTIVITY = "activity"


class ClientBase(BaseModel):
    """Base client fields."""

    name: str = Field(min_length=1, max_length=200)
    kind: ClientKind = ClientKind.CLIENT
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    siret: Optional[str] = None
    default_rate: Optional[float] = Field(default=None, ge=0)
    color: Optional[str] = None
    description: Optional[str] = None


class ClientCreate(ClientBase):
    """Client creation model."""

    pass


class ClientUpdate(BaseModel):
    """Client update model - all fields optional."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    kind: Optional[ClientKind] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    siret: Optional[str] = None
    default_rate: Optional[float] = Field(default=None, ge=0)
    color: Optional[str] = None
    description: Optional[str] = None


class Client(ClientBase):
    """Full client model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
