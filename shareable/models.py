"""
Request and result types for the render pipeline.
"""
import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .core.errors import InputError


TRUTHY_FLAGS = ("true", "1")


@dataclass(frozen=True)
class Dimensions:
    """Viewport size used for a capture."""

    width: int
    height: int
    device_scale_factor: int = 1

    def as_viewport(self) -> dict:
        return {"width": self.width, "height": self.height}


class ShareFormat(str, Enum):
    """Social preview formats and their fixed image sizes."""

    OPEN_GRAPH = "og"
    TWITTER = "twitter"

    @property
    def dimensions(self) -> Dimensions:
        if self is ShareFormat.TWITTER:
            return Dimensions(width=1200, height=628)
        return Dimensions(width=1200, height=630)

    @classmethod
    def parse(cls, value: Optional[str]) -> "ShareFormat":
        """
        Parse the ``format`` query value.

        Missing or empty values select Open Graph.

        Raises:
            InputError: If the value names no known format
        """
        if value is None or not value.strip():
            return cls.OPEN_GRAPH
        normalized = value.strip().lower()
        if normalized in ("og", "opengraph"):
            return cls.OPEN_GRAPH
        if normalized == "twitter":
            return cls.TWITTER
        raise InputError(f"Unsupported format '{value}'. Use 'og' or 'twitter'.")


def cache_key(url: str, share_format: ShareFormat) -> str:
    """Deterministic cache key for a (url, format) pair."""
    return hashlib.md5(f"{url}{share_format.value}".encode("utf-8")).hexdigest()


def parse_flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in TRUTHY_FLAGS


class RenderRequest(BaseModel):
    """A single render request, immutable once built."""

    model_config = ConfigDict(frozen=True)

    url: str
    format: ShareFormat = ShareFormat.OPEN_GRAPH
    rebuild: bool = False
    skip_readiness_check: bool = False

    @property
    def cache_key(self) -> str:
        return cache_key(self.url, self.format)

    @property
    def dimensions(self) -> Dimensions:
        return self.format.dimensions

    @classmethod
    def from_query(
        cls,
        url: Optional[str],
        format: Optional[str] = None,
        rebuild: Optional[str] = None,
        skip_template_check: Optional[str] = None,
    ) -> "RenderRequest":
        """
        Build a request from raw query string values.

        Raises:
            InputError: If ``url`` is missing or ``format`` is unknown
        """
        if not url or not url.strip():
            raise InputError("URL parameter is required")
        return cls(
            url=url.strip(),
            format=ShareFormat.parse(format),
            rebuild=parse_flag(rebuild),
            skip_readiness_check=parse_flag(skip_template_check),
        )


@dataclass(frozen=True)
class RenderResult:
    """Image bytes produced (or served from cache) for a request."""

    image: bytes
    cache_hit: bool
    cache_key: str
