import logging

from .decoder import QOIDecoder
from .encoder import QOIEncoder
from .header import QOIHeader, read_header
from .stream import ByteReader
from .utils import load_image, save_image

logger = logging.getLogger(__name__)


def image_to_qoi(image_path, qoi_path, colorspace: int = 0) -> int:
    """Convert any image Pillow (or rawpy) can read to a .qoi file."""
    pixel_data, desc = load_image(image_path)
    desc["colorspace"] = colorspace

    encoded = QOIEncoder.encode(pixel_data.tobytes(), desc)

    with open(qoi_path, "wb") as f:
        f.write(encoded)
    logger.info(
        "Converted %s (%dx%d, %d channels, %d raw bytes) to %s (%d bytes)",
        image_path,
        desc["width"],
        desc["height"],
        desc["channels"],
        pixel_data.nbytes,
        qoi_path,
        len(encoded),
    )
    return len(encoded)


def qoi_to_image(qoi_path, image_path, output_channels: int = None) -> dict:
    """Convert a .qoi file to whatever format image_path's extension names."""
    with open(qoi_path, "rb") as f:
        content = f.read()

    decoded = QOIDecoder.decode(content, output_channels=output_channels)
    save_image(image_path, decoded["data"], decoded)
    logger.info(
        "Converted %s to %s (%dx%d, %d channels)",
        qoi_path,
        image_path,
        decoded["width"],
        decoded["height"],
        decoded["channels"],
    )
    return decoded


def png_to_qoi(png_path, qoi_path):
    return image_to_qoi(png_path, qoi_path)


def qoi_to_png(qoi_path, png_path):
    return qoi_to_image(qoi_path, png_path)


def read_qoi_header(qoi_path) -> QOIHeader:
    """Read only the 14-byte header of a .qoi file."""
    with open(qoi_path, "rb") as f:
        content = f.read(QOIHeader.SIZE)
    return read_header(ByteReader(content))
