import logging

from .constants import (
    CHUNK_KINDS,
    QOI_MASK_6,
    QOI_PADDING,
    QOI_PIXELS_MAX,
    QOI_RUN_MAX,
    ChunkKind,
    color_hash,
)
from .errors import (
    QOIChunkError,
    QOIError,
    QOIHeaderError,
    QOIStreamError,
    QOITrailerError,
)
from .header import read_header
from .state import Pixel, PredictiveState
from .stream import ByteReader

logger = logging.getLogger(__name__)


class QOIDecoder:
    """
    A class to decode QOI (Quite OK Image) files into raw pixel data.
    """

    @staticmethod
    def decode(
        file_data: bytes,
        byte_offset: int = 0,
        byte_length: int = None,
        output_channels: int = None,
    ) -> dict:
        """
        Decode a QOI file given as a bytes/bytearray object.

        :param file_data: Bytes containing the QOI file.
        :param byte_offset: Offset to the start of the QOI file in file_data.
        :param byte_length: Length of the QOI file in bytes.
        :param output_channels: Number of channels to include in the decoded array (3 or 4).
                                If None, 4 when the header declares 4 channels, otherwise 3.
        :return: Dictionary containing width, height, colorspace, channels, and data (bytes).
        :raises QOIError: on a bad signature, an unknown chunk, truncated data or a bad end marker.
        """
        # --- Handle Slicing ---
        if byte_length is None:
            byte_length = len(file_data) - byte_offset

        # A view of the slice avoids copying large files
        data = memoryview(file_data)[byte_offset : byte_offset + byte_length]
        return QOIDecoder.decode_stream(ByteReader(data), output_channels)

    @staticmethod
    def decode_stream(reader: ByteReader, output_channels: int = None) -> dict:
        """Decode one QOI image starting at the reader's current position."""
        header = read_header(reader)
        channels = header.channels

        # Anything but 4 channels in the header is written out as RGB
        if output_channels is None:
            output_channels = 4 if channels == 4 else 3
        elif output_channels not in (3, 4):
            raise QOIError("QOI.decode: The number of channels for the output is invalid")

        total_pixels = header.pixel_count
        if total_pixels > QOI_PIXELS_MAX:
            raise QOIHeaderError(
                f"QOI.decode: {header.width}x{header.height} is above the {QOI_PIXELS_MAX} pixel limit"
            )

        # Every chunk takes at least one byte and yields at most QOI_RUN_MAX pixels
        if reader.remaining() < -(-total_pixels // QOI_RUN_MAX):
            raise QOIStreamError(
                f"QOI.decode: {reader.remaining()} bytes cannot hold {total_pixels} pixels"
            )

        # --- Initialization ---
        result = bytearray(total_pixels * output_channels)
        state = PredictiveState()
        write_pos = 0
        pixels_processed = 0

        # --- Decoding Loop ---
        while pixels_processed < total_pixels:
            b1 = reader.read_u8()
            kind = CHUNK_KINDS[b1]
            prev = state.prev

            if kind is ChunkKind.RGB:
                r, g, b = reader.read_bytes(3)
                px = Pixel(r, g, b, prev.a)

            elif kind is ChunkKind.RGBA:
                px = Pixel(*reader.read_bytes(4))

            elif kind is ChunkKind.RUN:
                # Repeat the previous pixel, the index is left alone
                run = min((b1 & QOI_MASK_6) + 1, total_pixels - pixels_processed)
                px_bytes = bytes(prev[:output_channels])
                result[write_pos : write_pos + run * output_channels] = px_bytes * run
                write_pos += run * output_channels
                pixels_processed += run
                continue

            elif kind is ChunkKind.INDEX:
                px = state.lookup(b1 & QOI_MASK_6)

            elif kind is ChunkKind.DIFF:
                # Extract 2-bit differences and subtract bias of 2
                px = Pixel(
                    (prev.r + ((b1 >> 4) & 0x03) - 2) & 0xFF,
                    (prev.g + ((b1 >> 2) & 0x03) - 2) & 0xFF,
                    (prev.b + (b1 & 0x03) - 2) & 0xFF,
                    prev.a,
                )

            elif kind is ChunkKind.LUMA:
                b2 = reader.read_u8()
                dg = (b1 & QOI_MASK_6) - 32
                dr_dg = ((b2 >> 4) & 0x0F) - 8
                db_dg = (b2 & 0x0F) - 8
                px = Pixel(
                    (prev.r + dg + dr_dg) & 0xFF,
                    (prev.g + dg) & 0xFF,
                    (prev.b + dg + db_dg) & 0xFF,
                    prev.a,
                )

            else:
                raise QOIChunkError(
                    f"QOI.decode: Unknown chunk tag 0x{b1:02x} at byte {reader.tell() - 1}"
                )

            result[write_pos : write_pos + output_channels] = px[:output_channels]
            write_pos += output_channels
            pixels_processed += 1
            state.push(px, color_hash(*px))

        decoded = {
            "width": header.width,
            "height": header.height,
            "colorspace": header.colorspace,
            "channels": output_channels,
            "data": bytes(result),
        }

        # --- End Marker ---
        try:
            padding = reader.read_bytes(len(QOI_PADDING))
        except QOIStreamError as e:
            raise QOITrailerError("QOI.decode: The end marker is missing", decoded) from e
        if padding != QOI_PADDING:
            raise QOITrailerError("QOI.decode: The end marker is invalid", decoded)

        logger.debug(
            "decoded %dx%d (%d channels) from %d bytes",
            header.width,
            header.height,
            channels,
            reader.tell(),
        )
        return decoded

    @staticmethod
    def is_valid(file_data: bytes) -> bool:
        """Return True when file_data decodes completely with a correct end marker."""
        try:
            QOIDecoder.decode(file_data)
        except QOIError:
            return False
        return True
