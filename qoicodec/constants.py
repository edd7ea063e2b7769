import enum

# QOI Constants
QOI_OP_INDEX = 0x00  # 00xxxxxx
QOI_OP_DIFF = 0x40  # 01xxxxxx
QOI_OP_LUMA = 0x80  # 10xxxxxx
QOI_OP_RUN = 0xC0  # 11xxxxxx
QOI_OP_RGB = 0xFE  # 11111110
QOI_OP_RGBA = 0xFF  # 11111111

QOI_MASK_2 = 0xC0
QOI_MASK_6 = 0x3F

QOI_MAGIC = b"qoif"
QOI_HEADER_SIZE = 14
QOI_HISTORY_SIZE = 64

# 7 bytes of 0x00 followed by 1 byte of 0x01
QOI_PADDING = b"\x00\x00\x00\x00\x00\x00\x00\x01"

# Longest run the encoder lets build up before flushing it, counted from the
# pixel that started the run. The flushed chunk stores 61 (62 repeats) and the
# run carries on from 2. Stored values 62 and 63 would read as the RGB and RGBA
# literal tags, so 61 is also the largest run a decoder ever sees.
QOI_RUN_FLUSH = 64
QOI_RUN_FLUSH_VALUE = 61
# Longest run a single chunk can hold, 0xfd
QOI_RUN_MAX = QOI_RUN_FLUSH_VALUE + 1

# Safety limit (400MP)
QOI_PIXELS_MAX = 400000000


def color_hash(r: int, g: int, b: int, a: int) -> int:
    """Calculates the index position for the color array."""
    return (r * 3 + g * 5 + b * 7 + a * 11) % QOI_HISTORY_SIZE


class ChunkKind(enum.Enum):
    """The six chunk encodings, in the order a tag byte is matched against them."""

    RGB = QOI_OP_RGB
    RGBA = QOI_OP_RGBA
    RUN = QOI_OP_RUN
    INDEX = QOI_OP_INDEX
    DIFF = QOI_OP_DIFF
    LUMA = QOI_OP_LUMA

    @property
    def exact(self) -> bool:
        """Literal chunks are identified by the whole tag byte."""
        return self in (ChunkKind.RGB, ChunkKind.RGBA)

    @classmethod
    def classify(cls, tag: int):
        """
        Map a tag byte to its chunk kind.

        Exact tags win over the 2-bit patterns, so 0xFE and 0xFF are literals
        even though their high bits also match the run tag. Returns None when
        nothing matches.
        """
        for kind in cls:
            if kind.exact:
                if tag == kind.value:
                    return kind
            elif (tag & QOI_MASK_2) == kind.value:
                return kind
        return None


# Tag byte -> chunk kind, precomputed so the decoder does one lookup per chunk
CHUNK_KINDS = tuple(ChunkKind.classify(tag) for tag in range(256))
