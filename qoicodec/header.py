from dataclasses import dataclass

from .constants import QOI_HEADER_SIZE, QOI_MAGIC
from .errors import QOIHeaderError
from .stream import ByteReader, ByteWriter


@dataclass
class QOIHeader:
    """
    The fixed 14-byte QOI header.

    magic(4), width(4), height(4), channels(1), colorspace(1)
    """

    width: int
    height: int
    channels: int
    colorspace: int = 0

    SIZE = QOI_HEADER_SIZE

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @classmethod
    def from_description(cls, description: dict) -> "QOIHeader":
        return cls(
            width=description.get("width"),
            height=description.get("height"),
            channels=description.get("channels"),
            colorspace=description.get("colorspace", 0),
        )

    def to_description(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "channels": self.channels,
            "colorspace": self.colorspace,
        }


def write_header(writer: ByteWriter, header: QOIHeader):
    """Write the header verbatim. Channels and colorspace are not checked here."""
    # 0x71 = 'q', 0x6F = 'o', 0x69 = 'i', 0x66 = 'f'
    for c in QOI_MAGIC.decode("ascii"):
        writer.write_char(c)
    writer.write_u32(header.width)
    writer.write_u32(header.height)
    writer.write_u8(header.channels)
    writer.write_u8(header.colorspace)


def read_header(reader: ByteReader) -> QOIHeader:
    """
    Read the header, stopping right after the signature if it is wrong.

    :raises QOIHeaderError: the first 4 bytes are not ``qoif``.
    """
    magic = "".join(reader.read_char() for _ in range(4))
    if magic != QOI_MAGIC.decode("ascii"):
        raise QOIHeaderError("QOI.decode: The signature of the QOI file is invalid")

    width = reader.read_u32()
    height = reader.read_u32()
    channels = reader.read_u8()
    colorspace = reader.read_u8()
    return QOIHeader(width, height, channels, colorspace)
