import pytest

from qoicodec import QOIDecoder, QOIEncodeError, QOIEncoder
from qoicodec.constants import QOI_PADDING

from conftest import A, chunks_of, header_bytes, rgba


def encode_rgba(*pixels):
    return QOIEncoder.encode(
        rgba(*pixels),
        {"width": len(pixels), "height": 1, "channels": 4, "colorspace": 0},
    )


def test_two_identical_pixels():
    encoded = encode_rgba(A, A)

    assert encoded == (
        header_bytes(2, 1, 4, 0)
        + b"\xfe\x0a\x14\x1e"  # first pixel, QOI_OP_RGB
        + b"\xc0"  # run of 1 repeat, stored as run length 2 - 2
        + QOI_PADDING
    )
    assert QOIDecoder.decode(encoded)["data"] == rgba(A, A)


def test_literal_rgb():
    assert chunks_of(encode_rgba(A)) == b"\xfe\x0a\x14\x1e"


def test_literal_rgba_when_alpha_changes():
    assert chunks_of(encode_rgba(A, (10, 20, 30, 128)))[4:] == b"\xff\x0a\x14\x1e\x80"


def test_alpha_change_never_uses_diff_or_luma():
    small_step = chunks_of(encode_rgba(A, (11, 19, 30, 100)))[4:]
    assert small_step == b"\xff\x0b\x13\x1e\x64"


def test_index():
    b = (200, 100, 50, 255)
    assert chunks_of(encode_rgba(A, b, A)) == (
        b"\xfe\x0a\x14\x1e" + b"\xfe\xc8\x64\x32" + b"\x09"
    )


def test_index_is_checked_first():
    # (0, 0, 0, 0) hashes to slot 0, which starts out holding (0, 0, 0, 0)
    assert chunks_of(encode_rgba((0, 0, 0, 0))) == b"\x00"


def test_diff():
    # dr=+1 dg=-1 db=0 -> 0x40 | 3 << 4 | 1 << 2 | 2
    assert chunks_of(encode_rgba(A, (11, 19, 30, 255)))[4:] == b"\x76"


def test_luma():
    # dg=10, dr-dg=0, db-dg=-5
    assert chunks_of(encode_rgba(A, (20, 30, 35, 255)))[4:] == b"\xaa\x83"


def test_luma_limits():
    # dg=-32, dr-dg=7, db-dg=-8 is still LUMA; one more step on green is not
    assert chunks_of(encode_rgba((100, 100, 100, 255), (75, 68, 60, 255)))[4:] == (
        b"\x80\xf0"
    )
    assert chunks_of(encode_rgba((100, 100, 100, 255), (74, 67, 59, 255)))[4:6] == (
        b"\xfe\x4a"
    )


def test_deltas_do_not_wrap():
    # 255 -> 0 is +1 modulo 256 but the encoder does not use that
    assert chunks_of(encode_rgba((255, 0, 0, 255), (0, 0, 0, 255)))[4:] == (
        b"\xfe\x00\x00\x00"
    )


def test_run_from_start_pixel():
    # The previous pixel starts as opaque black, so a black image is one run
    encoded = QOIEncoder.encode(
        bytes(9), {"width": 3, "height": 1, "channels": 3, "colorspace": 0}
    )
    assert chunks_of(encoded) == b"\xc2"
    assert QOIDecoder.decode(encoded)["data"] == bytes(9)


@pytest.mark.parametrize(
    "count, runs",
    [
        (1, b""),
        (2, b"\xc0"),
        (63, b"\xfd"),
        (64, b"\xfd\xc0"),
        (65, b"\xfd\xc1"),
        (126, b"\xfd\xfd\xc0"),
        (127, b"\xfd\xfd\xc1"),
    ],
)
def test_run_boundaries(count, runs):
    encoded = encode_rgba(*[A] * count)

    assert chunks_of(encoded) == b"\xfe\x0a\x14\x1e" + runs
    assert QOIDecoder.decode(encoded)["data"] == rgba(*[A] * count)


def test_run_is_flushed_before_next_pixel():
    b = (11, 19, 30, 255)
    assert chunks_of(encode_rgba(A, A, A, b)) == b"\xfe\x0a\x14\x1e" + b"\xc1" + b"\x76"


def test_run_does_not_touch_index():
    # After a run the next differing pixel is matched against history, not the run
    c = (200, 100, 50, 255)
    chunks = chunks_of(encode_rgba(A, c, c, A))
    assert chunks == b"\xfe\x0a\x14\x1e" + b"\xfe\xc8\x64\x32" + b"\xc0" + b"\x09"


def test_rgb_input_keeps_alpha_opaque():
    encoded = QOIEncoder.encode(
        bytes((10, 20, 30, 11, 19, 30)),
        {"width": 2, "height": 1, "channels": 3, "colorspace": 1},
    )
    assert encoded[:14] == header_bytes(2, 1, 3, 1)
    assert chunks_of(encoded) == b"\xfe\x0a\x14\x1e\x76"


def test_accepts_lists_and_arrays():
    np = pytest.importorskip("numpy")
    desc = {"width": 2, "height": 1, "channels": 4, "colorspace": 0}
    as_bytes = QOIEncoder.encode(rgba(A, A), desc)

    assert QOIEncoder.encode(list(rgba(A, A)), desc) == as_bytes
    assert QOIEncoder.encode(np.array([[A, A]], dtype=np.uint8), desc) == as_bytes


@pytest.mark.parametrize(
    "desc",
    [
        {"width": -1, "height": 1, "channels": 4, "colorspace": 0},
        {"width": 1, "height": 2**32, "channels": 4, "colorspace": 0},
        {"width": 1, "height": 1, "channels": 2, "colorspace": 0},
        {"width": 1, "height": 1, "channels": 4, "colorspace": 2},
        {"width": 2, "height": 1, "channels": 4, "colorspace": 0},
    ],
)
def test_validation(desc):
    with pytest.raises(QOIEncodeError):
        QOIEncoder.encode(rgba(A), desc)


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        QOIEncoder.encode(b"", {"width": 1, "height": 1, "channels": 4, "colorspace": 0})


def test_permissive_mode_writes_header_verbatim():
    desc = {"width": 2, "height": 1, "channels": 5, "colorspace": 7}
    encoded = QOIEncoder.encode(bytes((10, 20, 30, 11, 19, 30)), desc, validate=False)

    assert encoded[:14] == header_bytes(2, 1, 5, 7)
    # Anything but 4 channels is read as RGB
    assert chunks_of(encoded) == b"\xfe\x0a\x14\x1e\x76"
    decoded = QOIDecoder.decode(encoded)
    assert decoded["channels"] == 3
    assert decoded["data"] == bytes((10, 20, 30, 11, 19, 30))


def test_permissive_mode_still_needs_enough_pixels():
    with pytest.raises(QOIEncodeError):
        QOIEncoder.encode(
            bytes(3), {"width": 2, "height": 1, "channels": 3, "colorspace": 0}, validate=False
        )
