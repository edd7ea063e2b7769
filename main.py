import sys

from qoicodec.cli import main

if __name__ == "__main__":
    sys.exit(main())
