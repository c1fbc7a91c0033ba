"""
Pydantic models for the Pinterest v5 payloads we consume.

Pinterest responses are loosely typed: fields go missing, come back as null,
or change shape between pin types. These models absorb that once, at the
ingestion boundary, so the rest of the code works with plain optional
attributes instead of scattered ``.get()`` fallbacks.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _text_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    return None


def _dicts_only(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class PinterestImage(_Payload):
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @field_validator("url", mode="before")
    @classmethod
    def _url(cls, v):
        return _text_or_none(v)

    @field_validator("width", "height", mode="before")
    @classmethod
    def _dimension(cls, v):
        try:
            return int(v)
        except (TypeError, ValueError, OverflowError):
            return None


class PinterestMedia(_Payload):
    media_type: Optional[str] = None
    images: Dict[str, PinterestImage] = Field(default_factory=dict)

    @field_validator("media_type", mode="before")
    @classmethod
    def _media_type(cls, v):
        return _text_or_none(v)

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        if not isinstance(v, dict):
            return {}
        return {str(size): image for size, image in v.items() if isinstance(image, dict)}


class PinterestMediaItem(_Payload):
    media_type: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("media_type", "image_url", mode="before")
    @classmethod
    def _text(cls, v):
        return _text_or_none(v)


class PinterestPin(_Payload):
    """A raw pin as returned by ``GET /boards/{board_id}/pins``."""

    id: str = ""
    title: Optional[str] = None
    note: Optional[str] = None
    description: Optional[str] = None
    alt_text: Optional[str] = None
    link: Optional[str] = None
    media: Optional[PinterestMedia] = None
    media_list: List[PinterestMediaItem] = Field(default_factory=list)
    media_type: Optional[str] = None
    created_at: Optional[str] = None
    dominant_color: Optional[str] = None
    board_section_id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator(
        "title",
        "note",
        "description",
        "alt_text",
        "link",
        "media_type",
        "created_at",
        "dominant_color",
        "board_section_id",
        mode="before",
    )
    @classmethod
    def _text(cls, v):
        return _text_or_none(v)

    @field_validator("media", mode="before")
    @classmethod
    def _media(cls, v):
        return v if isinstance(v, dict) else None

    @field_validator("media_list", mode="before")
    @classmethod
    def _media_list(cls, v):
        return _dicts_only(v)


class PinterestBoard(_Payload):
    id: str = ""
    name: Optional[str] = None
    description: Optional[str] = None
    privacy: Optional[str] = None
    pin_count: Optional[int] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator("name", "description", "privacy", mode="before")
    @classmethod
    def _text(cls, v):
        return _text_or_none(v)

    @field_validator("pin_count", mode="before")
    @classmethod
    def _pin_count(cls, v):
        try:
            return int(v)
        except (TypeError, ValueError, OverflowError):
            return None


class PinPage(_Payload):
    items: List[PinterestPin] = Field(default_factory=list)
    bookmark: Optional[str] = None

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, v):
        return _dicts_only(v)

    @field_validator("bookmark", mode="before")
    @classmethod
    def _bookmark(cls, v):
        return _text_or_none(v) or None


class BoardPage(_Payload):
    items: List[PinterestBoard] = Field(default_factory=list)
    bookmark: Optional[str] = None

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, v):
        return _dicts_only(v)

    @field_validator("bookmark", mode="before")
    @classmethod
    def _bookmark(cls, v):
        return _text_or_none(v) or None
