"""Work category model definitions."""
from pydantic import BaseModel, Field

DEFAULT_CATEGORY = "Standard"

DEFAULT_CATEGORIES = [
    DEFAULT_CATEGORY,
    "Heures supplémentaires",
    "Travail de nuit",
    "Weekend",
    "Jours fériés",
    "Télétravail",
    "Déplacement",
    "Formation",
    "Réunion",
    "Support",
]


class CategoryCreate(BaseModel):
    """Custom category creation model."""

    name: str = Field(min_length=1, max_length=100)


class CategoryList(BaseModel):
    """Categories available to a user."""

    defaults: list[str]
    custom: list[str]
    all: list[str]
