from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .converter import image_to_qoi, qoi_to_image, read_qoi_header
from .decoder import QOIDecoder
from .errors import QOIError

logger = logging.getLogger(__name__)


def setup_logging(log_file: Optional[Path], verbose: bool = False) -> None:
    log_fmt = "[%(asctime)s] %(levelname)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level, format=log_fmt, datefmt=datefmt, handlers=handlers, force=True
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="qoicodec", description="QOI image encoder/decoder")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="Image file -> .qoi")
    enc.add_argument("input")
    enc.add_argument("output")
    enc.add_argument("--colorspace", type=int, choices=(0, 1), default=0)

    dec = sub.add_parser("decode", help=".qoi -> any image format Pillow can write")
    dec.add_argument("input")
    dec.add_argument("output")
    dec.add_argument("--channels", type=int, choices=(3, 4), default=None)

    info = sub.add_parser("info", help="Print the header of a .qoi file")
    info.add_argument("input")

    verify = sub.add_parser("verify", help="Check that a .qoi file decodes cleanly")
    verify.add_argument("input")
    return p.parse_args(argv)


def run(args) -> int:
    if args.command == "encode":
        image_to_qoi(args.input, args.output, colorspace=args.colorspace)

    elif args.command == "decode":
        qoi_to_image(args.input, args.output, output_channels=args.channels)

    elif args.command == "info":
        header = read_qoi_header(args.input)
        print(
            f"{args.input}: {header.width}x{header.height} "
            f"channels={header.channels} colorspace={header.colorspace}"
        )

    elif args.command == "verify":
        content = Path(args.input).read_bytes()
        if not QOIDecoder.is_valid(content):
            logger.error("%s is not a valid QOI stream", args.input)
            return 1
        logger.info("%s OK", args.input)

    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        return run(args)
    except (QOIError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
