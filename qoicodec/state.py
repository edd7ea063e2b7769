from typing import NamedTuple

from .constants import QOI_HISTORY_SIZE, color_hash


class Pixel(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


# Initial pixel state (R, G, B, A), opaque black
START_PIXEL = Pixel(0, 0, 0, 255)
# Index array slots start as (0, 0, 0, 0)
EMPTY_PIXEL = Pixel(0, 0, 0, 0)


class PredictiveState:
    """
    State shared by the encoder and decoder for one image.

    Both sides must call :meth:`push` with exactly the same pixels in the same
    order, otherwise index chunks point at different colors. A new instance is
    made for every encode or decode call.
    """

    __slots__ = ("prev", "index", "run")

    def __init__(self):
        self.prev = START_PIXEL
        self.index = [EMPTY_PIXEL] * QOI_HISTORY_SIZE
        # Encode only: 0 when no run is open, otherwise 2..64
        self.run = 0

    def lookup(self, index_pos: int) -> Pixel:
        return self.index[index_pos]

    def push(self, px: Pixel, index_pos: int = None) -> None:
        """Store px in the color history and make it the previous pixel."""
        if index_pos is None:
            index_pos = color_hash(*px)
        self.index[index_pos] = px
        self.prev = px
