"""Exception types raised while decoding and converting PS2 icons.

Every error derives from ValueError, like the rest of the format readers:
callers that only care about "bad input" can catch ValueError, callers
that want to distinguish causes catch the specific subclass.
"""


class IconError(ValueError):
    """Base class for all icon decoding and conversion errors."""


class UnexpectedEof(IconError):
    """A read would run past the end of the buffer."""

    def __init__(self, offset, wanted, available):
        super().__init__(
            f"Unexpected end of data at offset 0x{offset:x}: "
            f"wanted {wanted} bytes, {available} available"
        )
        self.offset = offset
        self.wanted = wanted
        self.available = available


class DecodeError(IconError):
    """Base class for errors raised by the icon decoder."""


class MalformedHeader(DecodeError):
    """Bad magic, bad section id, or a count outside the decode limits."""


class TruncatedFile(DecodeError):
    """The buffer is shorter than a section declares."""


class IndexOutOfRange(DecodeError):
    """A shape or keyframe references a vertex or frame that does not exist."""


class InvalidScale(IconError):
    """Mesh scale factor is not a positive finite number."""


class FrameOutOfRange(IconError):
    """Requested animation frame is not present in the icon."""


class InvalidTextureDimensions(IconError):
    """Texture data does not hold exactly 128x128 texels."""
