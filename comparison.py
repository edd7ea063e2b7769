#! Our QOI is pure Python while Pillow and the qoi package (https://pypi.org/project/qoi/) are C,
#! so the timings below only show the gap, not a fair race.

import argparse
import io
import time

import numpy as np
from PIL import Image

import qoi as OfficialQOI
from qoicodec import QOI, load_image

INPUT_IMAGE = "fruits.png"


def timed(label, fn):
    start_time = time.perf_counter()
    result = fn()
    print(f"{label:<24} {time.perf_counter() - start_time:8.3f} s")
    return result


def time_compare(pixel_data: np.ndarray):
    ours = timed("qoicodec encode", lambda: QOI.encode_array(pixel_data))
    official = timed("qoi (C) encode", lambda: OfficialQOI.encode(pixel_data))

    png = io.BytesIO()
    timed("Pillow PNG encode", lambda: Image.fromarray(pixel_data).save(png, format="PNG"))

    print(f"qoicodec size           {len(ours):>10} bytes")
    print(f"qoi (C) size            {len(official):>10} bytes")
    print(f"PNG size                {png.tell():>10} bytes")

    decoded = timed("qoicodec decode", lambda: QOI.decode_array(ours))
    assert np.array_equal(decoded, pixel_data), "Decoded data mismatch!"

    # Both encoders write the same wire format, so each side reads the other
    assert np.array_equal(QOI.decode_array(official), pixel_data)
    assert np.array_equal(OfficialQOI.decode(ours), pixel_data)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compare qoicodec with qoi and PNG")
    parser.add_argument("image", nargs="?", default=INPUT_IMAGE)
    args = parser.parse_args()

    pixel_data, desc = load_image(args.image)
    print(
        f"Loaded image {args.image}: {desc['width']}x{desc['height']} Channels: {desc['channels']}"
    )
    print(f"Original {args.image} {pixel_data.nbytes} bytes")

    time_compare(pixel_data)
