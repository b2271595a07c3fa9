"""Checked channel permutation for the exported RGBA bytes."""

from dataclasses import dataclass
from typing import Tuple

from ..constants import LAYOUT_LETTERS, RGBA_CHANNELS, DEFAULT_PIXEL_LAYOUT
from ..errors import MalformedPixelLayout


@dataclass(frozen=True)
class PixelLayout:
    """
    Assignment of semantic channels to the four output byte slots.

    ``sources[i]`` is the semantic channel (R=0, G=1, B=2, A=3) written to
    output byte i, so "bgra" yields sources (2, 1, 0, 3).
    """

    sources: Tuple[int, int, int, int]

    def __post_init__(self):
        object.__setattr__(self, 'sources', tuple(self.sources))
        if sorted(self.sources) != list(range(RGBA_CHANNELS)):
            raise MalformedPixelLayout(
                f"Pixel layout must be a permutation of {tuple(range(RGBA_CHANNELS))}, "
                f"got {self.sources}")

    @classmethod
    def parse(cls, layout) -> 'PixelLayout':
        """
        Parse a 4-letter layout string such as 'rgba' or 'bgra'.

        Raises:
            MalformedPixelLayout: If the string is not a permutation of 'rgba'
        """
        if isinstance(layout, cls):
            return layout

        if isinstance(layout, bytes):
            layout = layout.decode('ascii', errors='replace')

        if not isinstance(layout, str):
            raise MalformedPixelLayout(f"Pixel layout must be a string, got {type(layout).__name__}")

        letters = layout.strip().lower()
        if len(letters) != RGBA_CHANNELS or set(letters) != set(LAYOUT_LETTERS):
            raise MalformedPixelLayout(
                f"Pixel layout must use each of '{LAYOUT_LETTERS}' exactly once, got {layout!r}")

        return cls(tuple(LAYOUT_LETTERS.index(letter) for letter in letters))

    @classmethod
    def default(cls) -> 'PixelLayout':
        return cls.parse(DEFAULT_PIXEL_LAYOUT)

    def __str__(self):
        return ''.join(LAYOUT_LETTERS[source] for source in self.sources)
