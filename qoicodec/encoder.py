import logging

from .constants import (
    QOI_OP_DIFF,
    QOI_OP_INDEX,
    QOI_OP_LUMA,
    QOI_OP_RGB,
    QOI_OP_RGBA,
    QOI_OP_RUN,
    QOI_PADDING,
    QOI_RUN_FLUSH,
    QOI_RUN_FLUSH_VALUE,
    color_hash,
)
from .errors import QOIEncodeError
from .header import QOIHeader, write_header
from .state import Pixel, PredictiveState
from .stream import ByteWriter

logger = logging.getLogger(__name__)

U32_LIMIT = 4294967296


class QOIEncoder:
    @staticmethod
    def encode(color_data, description: dict, validate: bool = True) -> bytes:
        """
        Encode a QOI file.

        :param color_data: Bytes-like object (bytes, bytearray, list of ints, numpy array) containing pixel data.
        :param description: Dictionary containing 'width', 'height', 'channels', 'colorspace'.
        :param validate: Reject channels other than 3/4 and colorspace other than 0/1.
                         With False they are written to the header as given.
        :return: bytes object containing the QOI file content.
        """
        header = QOIHeader.from_description(description)
        if hasattr(color_data, "tobytes"):
            color_data = color_data.tobytes()

        # --- Validation ---
        if not (0 <= header.width < U32_LIMIT):
            raise QOIEncodeError("QOI.encode: Invalid description.width")

        if not (0 <= header.height < U32_LIMIT):
            raise QOIEncodeError("QOI.encode: Invalid description.height")

        if validate:
            if header.channels not in (3, 4):
                raise QOIEncodeError(
                    "QOI.encode: Invalid description.channels, must be 3 or 4"
                )

            if header.colorspace not in (0, 1):
                raise QOIEncodeError(
                    "QOI.encode: Invalid description.colorspace, must be 0 or 1"
                )

            if len(color_data) != header.pixel_count * header.channels:
                raise QOIEncodeError("QOI.encode: The length of colorData is incorrect")

        elif len(color_data) < header.pixel_count * _stride(header.channels):
            raise QOIEncodeError("QOI.encode: colorData is shorter than the image")

        writer = ByteWriter()
        QOIEncoder.encode_stream(writer, color_data, header)
        result = writer.getvalue()

        logger.debug(
            "encoded %dx%d (%d channels) into %d bytes",
            header.width,
            header.height,
            header.channels,
            len(result),
        )
        return result

    @staticmethod
    def encode_stream(writer: ByteWriter, color_data, header: QOIHeader) -> bool:
        """
        Write header, chunks and end marker for ``header.pixel_count`` pixels.

        No validation is done here; the header is written as given. Always
        returns True.
        """
        write_header(writer, header)

        channels = header.channels
        stride = _stride(channels)
        state = PredictiveState()

        # --- Pixel Loop ---
        for i in range(0, header.pixel_count * stride, stride):
            # Extract current pixel, alpha stays 255 for RGB input
            px = Pixel(
                color_data[i],
                color_data[i + 1],
                color_data[i + 2],
                color_data[i + 3] if channels == 4 else 255,
            )
            prev = state.prev

            # Check for run
            if px == prev:
                state.run = 2 if state.run == 0 else state.run + 1
                if state.run == QOI_RUN_FLUSH:
                    writer.write_u8(QOI_OP_RUN | QOI_RUN_FLUSH_VALUE)
                    state.run = 2
                continue

            # If we were in a run, end it before processing the new pixel
            if state.run >= 2:
                writer.write_u8(QOI_OP_RUN | (state.run - 2))
                state.run = 0

            index_pos = color_hash(*px)
            if state.lookup(index_pos) == px:
                writer.write_u8(QOI_OP_INDEX | index_pos)
            else:
                _write_delta_or_literal(writer, px, prev)

            state.push(px, index_pos)

        if state.run >= 2:
            writer.write_u8(QOI_OP_RUN | (state.run - 2))

        # --- End Marker ---
        writer.write_bytes(QOI_PADDING)
        return True


def _stride(channels: int) -> int:
    return 4 if channels == 4 else 3


def _write_delta_or_literal(writer: ByteWriter, px: Pixel, prev: Pixel):
    if px.a == prev.a:
        # Plain differences, no wrap-around
        vr = px.r - prev.r
        vg = px.g - prev.g
        vb = px.b - prev.b

        # QOI_OP_DIFF (2-bit diffs)
        if -2 <= vr <= 1 and -2 <= vg <= 1 and -2 <= vb <= 1:
            writer.write_u8(QOI_OP_DIFF | ((vr + 2) << 4) | ((vg + 2) << 2) | (vb + 2))
            return

        # QOI_OP_LUMA (green diff, and dr-dg, db-dg)
        vg_r = vr - vg
        vg_b = vb - vg
        if -32 <= vg <= 31 and -8 <= vg_r <= 7 and -8 <= vg_b <= 7:
            writer.write_u8(QOI_OP_LUMA | (vg + 32))
            writer.write_u8(((vg_r + 8) << 4) | (vg_b + 8))
            return

        # QOI_OP_RGB
        writer.write_u8(QOI_OP_RGB)
        writer.write_bytes((px.r, px.g, px.b))
    else:
        # QOI_OP_RGBA
        writer.write_u8(QOI_OP_RGBA)
        writer.write_bytes((px.r, px.g, px.b, px.a))
