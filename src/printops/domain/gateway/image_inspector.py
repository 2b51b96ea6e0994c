"""Port for reading metadata out of uploaded design images."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageMetadata:
    width: int
    height: int
    format: str
    density: int  # dots per inch; fills the order's quality field


class ImageInspector(ABC):

    @abstractmethod
    def inspect(self, content: bytes) -> ImageMetadata:
        """Raise ValidationError if *content* is not a readable image."""
