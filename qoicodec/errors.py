class QOIError(ValueError):
    """Base class for every error raised by the QOI codec."""


class QOIStreamError(QOIError):
    """Raised when a read runs past the end of the buffer."""


class QOIHeaderError(QOIError):
    """Raised when the stream does not start with the ``qoif`` signature."""


class QOIChunkError(QOIError):
    """Raised when a chunk tag matches none of the known chunk kinds."""


class QOITrailerError(QOIError):
    """
    Raised when the 8-byte end marker does not match.

    Every pixel was reconstructed before the trailer was checked, so the
    decoded dictionary is kept on ``result`` for callers that want to inspect
    it. It should not be trusted as image data.
    """

    def __init__(self, message: str, result: dict = None):
        super().__init__(message)
        self.result = result


class QOIEncodeError(QOIError):
    """Raised when the encoder rejects the image description or pixel data."""
