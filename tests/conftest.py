import numpy as np
import pytest

from qoicodec.constants import QOI_PADDING

A = (10, 20, 30, 255)


def header_bytes(width, height, channels, colorspace=0):
    return (
        b"qoif"
        + width.to_bytes(4, "big")
        + height.to_bytes(4, "big")
        + bytes((channels, colorspace))
    )


def chunks_of(encoded: bytes) -> bytes:
    """Strip the 14-byte header and the end marker."""
    assert encoded.endswith(QOI_PADDING)
    return encoded[14 : -len(QOI_PADDING)]


def rgba(*pixels) -> bytes:
    return bytes(c for px in pixels for c in px)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
