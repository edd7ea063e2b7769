import struct

from .errors import QOIStreamError


class ByteReader:
    """
    Sequential reader over a bytes-like buffer.

    Keeps a read position; every read advances it and raises QOIStreamError
    instead of returning short data.
    """

    def __init__(self, data, offset: int = 0):
        if not isinstance(data, (bytes, bytearray)):
            data = memoryview(data).cast("B")
        self.data = data
        self.pos = offset

    def tell(self) -> int:
        return self.pos

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def read_u8(self) -> int:
        if self.pos >= len(self.data):
            raise QOIStreamError(f"QOI.decode: Unexpected end of data at byte {self.pos}")
        value = self.data[self.pos]
        self.pos += 1
        return value

    def read_char(self) -> str:
        return chr(self.read_u8())

    def read_bytes(self, n: int) -> bytes:
        end = self.pos + n
        if end > len(self.data):
            raise QOIStreamError(
                f"QOI.decode: Unexpected end of data, wanted {n} bytes at byte {self.pos}"
            )
        chunk = bytes(self.data[self.pos : end])
        self.pos = end
        return chunk

    def read_u32(self) -> int:
        # > : Big Endian, I : unsigned int (4 bytes)
        return struct.unpack(">I", self.read_bytes(4))[0]


class ByteWriter:
    """Append-only writer backed by a bytearray."""

    def __init__(self):
        self.buffer = bytearray()

    def tell(self) -> int:
        return len(self.buffer)

    def write_u8(self, value: int):
        self.buffer.append(value)

    def write_char(self, value: str):
        self.buffer.append(ord(value))

    def write_bytes(self, values):
        self.buffer.extend(values)

    def write_u32(self, value: int):
        self.buffer.extend(struct.pack(">I", value))

    def getvalue(self) -> bytes:
        return bytes(self.buffer)
