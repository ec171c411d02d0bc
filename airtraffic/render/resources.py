"""
Assets consumed by the renderer.

The renderer never loads bitmaps itself.  It is handed:

* a :class:`ResourceProvider` that maps a hit's site id to a colour key and
  hands out the pin / ring images for that key;
* a :class:`MapAsset` that knows its native size and can produce a copy
  scaled to the display.

Images only need ``width()`` and ``height()`` (QPixmap and QImage qualify).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Tuple

NO_KEY = -1

# QPixmap / QImage or anything else with width() and height()
ImageAsset = Any


class ResourceProvider(ABC):
    """Per-site pin and ring images."""

    @abstractmethod
    def key_for(self, site_id: str) -> int:
        """Colour key for *site_id*, or ``NO_KEY`` if the site is unknown."""

    @abstractmethod
    def pin_for(self, key: int) -> ImageAsset:
        ...

    @abstractmethod
    def ring_for(self, key: int) -> ImageAsset:
        ...

    @abstractmethod
    def pin_size(self) -> Tuple[int, int]:
        """(width, height) of the pin images."""

    @abstractmethod
    def ring_size(self) -> Tuple[int, int]:
        """(width, height) of the ring images."""


class MapAsset(ABC):
    """The world map bitmap."""

    @abstractmethod
    def native_size(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def scaled_to(self, width: int, height: int) -> ImageAsset:
        """A copy stretched to exactly *width* x *height*."""


@dataclass(frozen=True)
class AssetSizes:
    """On-screen sizes of pins and rings, fixed when a provider is attached.

    Pins are drawn at half their bitmap size, the outer ring at two thirds
    of the ring bitmap and the inner ring at half the outer ring.
    """
    pin_width: int
    pin_height: int
    inner_ring_width: int
    inner_ring_height: int
    outer_ring_width: int
    outer_ring_height: int

    @classmethod
    def from_provider(cls, provider: ResourceProvider) -> "AssetSizes":
        pin_w, pin_h = provider.pin_size()
        ring_w, ring_h = provider.ring_size()
        outer_w = ring_w * 2 // 3
        outer_h = ring_h * 2 // 3
        return cls(
            pin_width=pin_w // 2,
            pin_height=pin_h // 2,
            inner_ring_width=outer_w // 2,
            inner_ring_height=outer_h // 2,
            outer_ring_width=outer_w,
            outer_ring_height=outer_h,
        )
