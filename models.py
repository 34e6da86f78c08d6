"""
Catalog Models
Version: 1.0

Pydantic models for civic-service directory entries.
DEPENDS ON: nothing (leaf module).

Entries are immutable once validated. Validators normalize loosely shaped
catalog records: missing text fields become "", tags are lowercased and
de-duplicated, unknown link types fall back to "info", and a missing or
non-numeric priority is stored as None (the ranker applies the default).
"""

import math
import re
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LinkType(str, Enum):
    """Kinds of action links an entry can carry."""
    PAYMENT = "payment"
    FORM = "form"
    ACTION = "action"
    MAP = "map"
    INFO = "info"


# Order used to pick the primary call-to-action link
PRIMARY_LINK_ORDER = (
    LinkType.PAYMENT,
    LinkType.FORM,
    LinkType.ACTION,
    LinkType.MAP,
    LinkType.INFO,
)


def _text_or_default(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


class Link(BaseModel):
    """Typed link (payment portal, form, map, ...)."""
    model_config = ConfigDict(frozen=True)

    type: LinkType = Field(default=LinkType.INFO)
    label: str = Field(default="Link")
    url: str = Field(default="#")

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> LinkType:
        if isinstance(v, LinkType):
            return v
        try:
            return LinkType(str(v).strip().lower())
        except ValueError:
            return LinkType.INFO

    @field_validator("label", mode="before")
    @classmethod
    def default_label(cls, v: Any) -> str:
        return _text_or_default(v, "Link")

    @field_validator("url", mode="before")
    @classmethod
    def default_url(cls, v: Any) -> str:
        return _text_or_default(v, "#")


class Contact(BaseModel):
    """Contact block. Every field is independently optional."""
    model_config = ConfigDict(frozen=True)

    phone_primary: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    hours: Optional[str] = Field(default=None)

    @field_validator("phone_primary", "email", "address", "hours", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    def phone_link(self) -> Optional[str]:
        """tel: URI for the primary phone (digits and '+' only)."""
        if not self.phone_primary:
            return None
        digits = re.sub(r"[^\d+]", "", self.phone_primary)
        return f"tel:{digits}"


class Entry(BaseModel):
    """
    A single civic-service directory entry.

    Fields:
        id: Unique identifier (required)
        name: Display name
        org: Organization name (may be empty)
        summary: Free-text summary (may be empty)
        tags: Lowercase tags, de-duplicated, catalog order kept
        contact: Contact block
        links: Typed links
        priority: Ranking tiebreaker; None means "use the default"
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(default="")
    org: str = Field(default="")
    summary: str = Field(default="")
    tags: Tuple[str, ...] = Field(default=())
    contact: Contact = Field(default_factory=Contact)
    links: Tuple[Link, ...] = Field(default=())
    priority: Optional[float] = Field(default=None)

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> str:
        if v is None or isinstance(v, bool):
            raise ValueError("entry id is required")
        text = str(v).strip()
        if not text:
            raise ValueError("entry id is required")
        return text

    @field_validator("name", "org", "summary", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return _text_or_default(v, "")

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> Tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return ()
        seen = []
        for tag in v:
            if tag is None:
                continue
            normalized = str(tag).strip().lower()
            if normalized and normalized not in seen:
                seen.append(normalized)
        return tuple(seen)

    @field_validator("contact", mode="before")
    @classmethod
    def default_contact(cls, v: Any) -> Any:
        if not isinstance(v, (dict, Contact)):
            return Contact()
        return v

    @field_validator("links", mode="before")
    @classmethod
    def normalize_links(cls, v: Any) -> Tuple[Any, ...]:
        if not isinstance(v, (list, tuple)):
            return ()
        return tuple(link for link in v if isinstance(link, (dict, Link)))

    @field_validator("priority", mode="before")
    @classmethod
    def numeric_priority(cls, v: Any) -> Optional[float]:
        # Only real numbers count; strings, booleans and NaN mean "absent"
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        if not math.isfinite(v):
            return None
        return float(v)

    def primary_link(self) -> Optional[Link]:
        """First link by type preference: payment, form, action, map, info."""
        for link_type in PRIMARY_LINK_ORDER:
            for link in self.links:
                if link.type == link_type:
                    return link
        return None
