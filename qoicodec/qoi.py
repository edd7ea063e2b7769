import numpy as np

from . import constants
from .decoder import QOIDecoder
from .encoder import QOIEncoder


class QOI:
    # QOI Constants
    QOI_OP_INDEX = constants.QOI_OP_INDEX
    QOI_OP_DIFF = constants.QOI_OP_DIFF
    QOI_OP_LUMA = constants.QOI_OP_LUMA
    QOI_OP_RUN = constants.QOI_OP_RUN
    QOI_OP_RGB = constants.QOI_OP_RGB
    QOI_OP_RGBA = constants.QOI_OP_RGBA

    QOI_MASK_2 = constants.QOI_MASK_2
    QOI_HEADER_SIZE = constants.QOI_HEADER_SIZE
    QOI_MAGIC = constants.QOI_MAGIC
    QOI_PADDING = constants.QOI_PADDING

    @classmethod
    def encode(cls, raw_bytes, width, height, channels, colorspace=0):
        """
        Encodes raw pixel data into QOI format.
        :param raw_bytes: bytes or bytearray of pixel data (RGB or RGBA)
        :param width: image width
        :param height: image height
        :param channels: 3 (RGB) or 4 (RGBA)
        :param colorspace: 0 (sRGB) or 1 (Linear)
        :return: bytes of encoded QOI data
        """
        return QOIEncoder.encode(
            raw_bytes,
            {
                "width": width,
                "height": height,
                "channels": channels,
                "colorspace": colorspace,
            },
        )

    @classmethod
    def decode(cls, qoi_data):
        """
        Decodes QOI data into raw pixels.
        :param qoi_data: bytes of the .qoi file
        :return: dictionary {width, height, channels, colorspace, data}
        """
        return QOIDecoder.decode(qoi_data)

    @classmethod
    def encode_array(cls, pixels: np.ndarray, colorspace: int = 0) -> bytes:
        """Encode a (height, width, 3|4) uint8 array."""
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError("QOI.encode: Expected an array of shape (height, width, 3|4)")
        height, width, channels = pixels.shape
        return cls.encode(
            np.ascontiguousarray(pixels, dtype=np.uint8).tobytes(),
            width,
            height,
            channels,
            colorspace,
        )

    @classmethod
    def decode_array(cls, qoi_data, output_channels: int = None) -> np.ndarray:
        """Decode to a (height, width, channels) uint8 array."""
        decoded = QOIDecoder.decode(qoi_data, output_channels=output_channels)
        return np.frombuffer(decoded["data"], dtype=np.uint8).reshape(
            decoded["height"], decoded["width"], decoded["channels"]
        )

    @classmethod
    def write(cls, filepath: str, pixels: np.ndarray, colorspace: int = 0) -> int:
        """Encode pixels to filepath and return the number of bytes written."""
        encoded = cls.encode_array(pixels, colorspace)
        with open(filepath, "wb") as f:
            f.write(encoded)
        return len(encoded)

    @classmethod
    def read(cls, filepath: str, output_channels: int = None) -> np.ndarray:
        with open(filepath, "rb") as f:
            content = f.read()
        return cls.decode_array(content, output_channels)
