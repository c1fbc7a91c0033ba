"""
Pydantic models for the style matching pipeline.

Models cover:
- Pins imported from a board (with derived embedding text + quality)
- Catalog products and ranked products
- Embedding cache entries and whole cache documents

All models serialize with camelCase keys, which is the shape of both the
persisted JSON documents and the HTTP responses.
"""

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Pins
# =============================================================================

class TextQuality(str, Enum):
    """Whether a pin's text carries enough signal to embed."""
    USABLE = "usable"
    LOW_SIGNAL = "low_signal"


class PinTextAssessment(CamelModel):
    embedding_text: str = ""
    usable_for_embedding: bool = False
    text_quality: TextQuality = TextQuality.LOW_SIGNAL


class PinMetadata(CamelModel):
    created_at: str = ""
    dominant_color: str = ""
    media_type: str = ""
    board_section_id: str = ""


class Pin(CamelModel):
    """
    One normalized pin. Created fresh on every import and never mutated;
    the next import of the same board replaces the whole set.
    """
    pin_id: str
    board_id: str
    title: str = ""
    description: str = ""
    alt_text: str = ""
    link: str = ""
    image_url: str = ""
    embedding_text: str = ""
    usable_for_embedding: bool = False
    text_quality: TextQuality = TextQuality.LOW_SIGNAL
    metadata: PinMetadata = Field(default_factory=PinMetadata)


class BoardImportResult(CamelModel):
    board_id: str
    pins: List[Pin] = Field(default_factory=list)
    usable_count: int = 0
    low_signal_count: int = 0
    cache_location: str = ""

    @property
    def imported_count(self) -> int:
        return len(self.pins)


# =============================================================================
# Products
# =============================================================================

class Product(CamelModel):
    """Read-only catalog item. Unknown fields are kept and passed through."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    name: str = ""
    brand: str = ""
    category: str = ""
    tags: List[str] = Field(default_factory=list)
    # Catalog prices are display values ("$84", 240) and pass through as given.
    price: Any = None
    product_url: str = ""
    image_url: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v):
        if v is None or v == "":
            raise ValueError("product id is required")
        return str(v)

    @field_validator("name", "brand", "category", "product_url", "image_url", mode="before")
    @classmethod
    def _text(cls, v):
        return v if isinstance(v, str) else ""

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v):
        if not isinstance(v, list):
            return []
        return [str(tag) for tag in v if tag is not None]


class RankedProduct(Product):
    score: float


# =============================================================================
# Embedding cache
# =============================================================================

class EmbeddingEntity(CamelModel):
    """An id plus the exact text to embed for it."""
    id: str
    text: str


class EmbeddingCacheEntry(CamelModel):
    """
    A content-addressed vector: reusable only while ``text`` still equals the
    entity's current text.
    """
    id: str
    text: str
    embedding: List[float]
    updated_at: int = 0
    key: str = ""


class EmbeddingCacheDocument(CamelModel):
    model: str
    items: List[EmbeddingCacheEntry] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, v: Any):
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict) and isinstance(item.get("embedding"), list)]
