from .decoder import QOIDecoder
from .encoder import QOIEncoder
from .errors import (
    QOIChunkError,
    QOIEncodeError,
    QOIError,
    QOIHeaderError,
    QOIStreamError,
    QOITrailerError,
)
from .header import QOIHeader
from .qoi import QOI
from .utils import load_image, save_image

__all__ = [
    "QOIEncoder",
    "QOIDecoder",
    "QOI",
    "QOIHeader",
    "QOIError",
    "QOIStreamError",
    "QOIHeaderError",
    "QOIChunkError",
    "QOITrailerError",
    "QOIEncodeError",
    "load_image",
    "save_image",
]
