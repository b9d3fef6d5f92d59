"""PS2 icon file header parser."""

from dataclasses import dataclass

from ..errors import MalformedHeader, TruncatedFile, UnexpectedEof
from .icon_constants import (
    HEADER_SIZE, HEADER_STRUCT, ICON_MAGIC, TEXTURE_FLAG_COMPRESSED,
)


@dataclass(frozen=True)
class DecodeLimits:
    """Upper bounds on header counts, chosen by the caller.

    A corrupted header can claim billions of vertices; anything above these
    limits is rejected with MalformedHeader before any allocation happens.
    """

    max_vertices: int = 65536
    max_shapes: int = 1024
    max_frames: int = 256
    max_keyframes: int = 1024
    max_triangles_per_shape: int = 65536
    max_keys_per_keyframe: int = 4096


class IconHeader:
    """Represents the 24-byte icon file header."""

    __slots__ = (
        'magic', 'frame_count', 'texture_type', 'reserved',
        'vertex_count', 'shape_count',
    )

    def __init__(self, magic=ICON_MAGIC, frame_count=1, texture_type=0,
                 reserved=1.0, vertex_count=0, shape_count=0):
        self.magic = magic
        self.frame_count = frame_count
        self.texture_type = texture_type
        self.reserved = reserved
        self.vertex_count = vertex_count
        self.shape_count = shape_count

    @property
    def is_animated(self):
        return self.frame_count > 1

    @property
    def texture_compressed(self):
        return bool(self.texture_type & TEXTURE_FLAG_COMPRESSED)

    @classmethod
    def read(cls, cursor):
        """Read and parse the header at the cursor position.

        Args:
            cursor: ByteCursor positioned at the start of the file

        Returns:
            IconHeader instance

        Raises:
            TruncatedFile: if fewer than HEADER_SIZE bytes are available
            MalformedHeader: if the magic is wrong or frame_count is zero
        """
        try:
            fields = cursor.read(HEADER_STRUCT)
        except UnexpectedEof as exc:
            raise TruncatedFile(
                f"Data too small for icon header: {cursor.remaining} < {HEADER_SIZE}"
            ) from exc

        header = cls(*fields)
        if header.magic != ICON_MAGIC:
            raise MalformedHeader(
                f"Invalid icon magic: 0x{header.magic:08x} (expected 0x{ICON_MAGIC:08x})"
            )
        if header.frame_count == 0:
            raise MalformedHeader("Icon declares zero frames")
        return header

    def validate(self, limits):
        """Reject counts larger than the caller's decode limits."""
        checks = (
            ("vertex", self.vertex_count, limits.max_vertices),
            ("shape", self.shape_count, limits.max_shapes),
            ("frame", self.frame_count, limits.max_frames),
        )
        for label, value, limit in checks:
            if value > limit:
                raise MalformedHeader(
                    f"Implausible {label} count {value} (limit {limit})"
                )

    def __repr__(self):
        return (
            f"IconHeader(vertices={self.vertex_count}, shapes={self.shape_count}, "
            f"frames={self.frame_count}, textureType=0x{self.texture_type:x})"
        )
