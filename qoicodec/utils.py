import numpy as np
from PIL import Image

RAW_EXTENSIONS = ("dng", "cr2", "nef", "arw", "raw")
ALPHA_MODES = ("RGBA", "LA", "PA")


def channels_for(img: Image.Image) -> int:
    """4 when the image carries any alpha, 3 otherwise."""
    if img.mode in ALPHA_MODES or "transparency" in img.info:
        return 4
    return 3


def mode_for(channels: int) -> str:
    return "RGBA" if channels == 4 else "RGB"


def load_image(filepath: str) -> tuple[np.ndarray, dict]:
    """Load an image and return pixel data as numpy array + description."""

    ext = str(filepath).lower().split(".")[-1]

    if ext in RAW_EXTENSIONS:
        # RAW formats - requires rawpy
        import rawpy

        with rawpy.imread(str(filepath)) as raw:
            rgb = raw.postprocess()
        img = Image.fromarray(rgb)
    else:
        # Standard formats (PNG, JPEG, etc.)
        img = Image.open(filepath)

    channels = channels_for(img)
    img = img.convert(mode_for(channels))

    return np.array(img), {
        "width": img.size[0],
        "height": img.size[1],
        "channels": channels,
        "colorspace": 0,
    }


def to_image(data, description: dict) -> Image.Image:
    """Wrap raw RGB/RGBA bytes (or a uint8 array) in a PIL image."""
    mode = mode_for(description["channels"])
    if isinstance(data, np.ndarray):
        data = np.ascontiguousarray(data, dtype=np.uint8).tobytes()
    return Image.frombytes(
        mode, (description["width"], description["height"]), bytes(data)
    )


def save_image(filepath: str, data, description: dict) -> None:
    """Save raw pixel data in whatever format Pillow picks from the extension."""
    to_image(data, description).save(filepath)
