"""PS2 icon binary decoder.

Turns the complete contents of an icon file into a RawIcon. The layout is
read in a single forward pass:

    header -> vertex pool -> shapes -> animation (animated icons only) -> texture

Decoding is all-or-nothing: either a RawIcon satisfying every invariant is
returned, or a DecodeError subclass is raised.
"""

import struct

from ..errors import (
    IndexOutOfRange, InvalidTextureDimensions, MalformedHeader,
    TruncatedFile, UnexpectedEof,
)
from .icon_constants import (
    ANIMATION_HEADER_STRUCT, ANIMATION_ID, COLOR_STRUCT, COORD_STRUCT,
    FIXED_POINT_ONE, KEY_STRUCT, KEYFRAME_STRUCT, RLE_LITERAL_BIT,
    TEXTURE_BLOCK_SIZE, TEXTURE_WORD_COUNT, TRIANGLE_STRUCT, UV_STRUCT,
    vertex_record_size,
)
from .icon_cursor import ByteCursor
from .icon_header import DecodeLimits, IconHeader
from .icon_objects import (
    AnimationHeader, AnimationKey, AnimationKeyframe, RawIcon, Shape,
)

_WORD = struct.Struct("<I")
_RLE_CODE = struct.Struct("<H")


def _fixed(value):
    return value / FIXED_POINT_ONE


class IconReader:
    """Reads and parses a complete icon buffer.

    Usage:
        reader = IconReader(data)
        icon = reader.read()
        # reader.header is available after read()
    """

    def __init__(self, data, limits=None):
        self.cursor = ByteCursor(data)
        self.limits = limits if limits is not None else DecodeLimits()
        self.header = None
        self._section = "header"

    def read(self):
        """Decode the whole buffer and return a RawIcon."""
        try:
            return self._read()
        except UnexpectedEof as exc:
            raise TruncatedFile(
                f"Truncated icon file in {self._section} section: {exc}"
            ) from exc

    def _read(self):
        # 1. Header
        self.header = header = IconHeader.read(self.cursor)
        header.validate(self.limits)

        # 2. Vertex pool
        self._section = "vertex"
        frames, normals, uvs, colors = self._read_vertices(header)

        # 3. Shapes (triangle groups)
        self._section = "shape"
        shapes = self._read_shapes(header)

        # 4. Animation, only written for icons with more than one frame
        animation = None
        if header.is_animated:
            self._section = "animation"
            animation = self._read_animation(header)

        # 5. Texture
        self._section = "texture"
        if header.texture_compressed:
            texture = self._read_compressed_texture()
        else:
            texture = self._read_raw_texture()

        return RawIcon(
            vertex_count=header.vertex_count,
            shape_count=header.shape_count,
            frame_count=header.frame_count,
            texture_type=header.texture_type,
            frames=frames,
            normals=normals,
            uvs=uvs,
            colors=colors,
            shapes=shapes,
            texture=texture,
            animation=animation,
        )

    def _read_vertices(self, header):
        """Parse the interleaved vertex pool.

        Each record holds one position per frame followed by a single
        normal, texture coordinate and color:

            frame_count * (s16 x, y, z, w)
            s16 nx, ny, nz, nw
            s16 u, v
            u8 r, g, b, a
        """
        count = header.vertex_count
        n_frames = header.frame_count
        needed = count * vertex_record_size(n_frames)
        if needed > self.cursor.remaining:
            raise TruncatedFile(
                f"Vertex pool needs {needed} bytes, {self.cursor.remaining} available"
            )

        cur = self.cursor
        frames = [[] for _ in range(n_frames)]
        normals = []
        uvs = []
        colors = []
        for _ in range(count):
            for frame in frames:
                x, y, z, _w = cur.read(COORD_STRUCT)
                frame.append((_fixed(x), _fixed(y), _fixed(z)))
            nx, ny, nz, _nw = cur.read(COORD_STRUCT)
            normals.append((_fixed(nx), _fixed(ny), _fixed(nz)))
            u, v = cur.read(UV_STRUCT)
            uvs.append((_fixed(u), _fixed(v)))
            colors.append(cur.read(COLOR_STRUCT))

        return (
            tuple(tuple(frame) for frame in frames),
            tuple(normals), tuple(uvs), tuple(colors),
        )

    def _read_shapes(self, header):
        """Parse the shape section.

        Format per shape:
            u8 name length
            N bytes: ASCII name
            u32 triangle count
            triangle count * (u32 i0, u32 i1, u32 i2)
        """
        cur = self.cursor
        limit = self.limits.max_triangles_per_shape
        vertex_count = header.vertex_count
        shapes = []
        for shape_index in range(header.shape_count):
            name_len = cur.u8()
            name = cur.read_bytes(name_len).decode("ascii", "replace")
            tri_count = cur.u32()
            if tri_count > limit:
                raise MalformedHeader(
                    f"Shape {shape_index} declares {tri_count} triangles (limit {limit})"
                )
            triangles = tuple(cur.read_many(TRIANGLE_STRUCT, tri_count))
            for tri in triangles:
                if max(tri) >= vertex_count:
                    raise IndexOutOfRange(
                        f"Shape {shape_index} ({name!r}) references vertex "
                        f"{max(tri)} but the icon has {vertex_count} vertices"
                    )
            shapes.append(Shape(name=name or f"shape_{shape_index}", triangles=triangles))
        return tuple(shapes)

    def _read_animation(self, header):
        """Parse the animation section of an animated icon.

        Format:
            u32 id (always 1)
            u32 frame length
            f32 animation speed
            u32 play offset
            u32 keyframe count
            For each keyframe:
                u32 frame index, u32 key count, u32 unknown, u32 unknown
                key count * (f32 time, f32 value)
        """
        cur = self.cursor
        anim_id, frame_length, speed, play_offset, kf_count = cur.read(ANIMATION_HEADER_STRUCT)
        if anim_id != ANIMATION_ID:
            raise MalformedHeader(f"Invalid animation section id: 0x{anim_id:x}")
        if kf_count > self.limits.max_keyframes:
            raise MalformedHeader(
                f"Implausible keyframe count {kf_count} (limit {self.limits.max_keyframes})"
            )

        keyframes = []
        for _ in range(kf_count):
            frame_index, key_count, unk1, unk2 = cur.read(KEYFRAME_STRUCT)
            if frame_index >= header.frame_count:
                raise IndexOutOfRange(
                    f"Keyframe references frame {frame_index} but the icon has "
                    f"{header.frame_count} frames"
                )
            if key_count > self.limits.max_keys_per_keyframe:
                raise MalformedHeader(
                    f"Implausible key count {key_count} "
                    f"(limit {self.limits.max_keys_per_keyframe})"
                )
            keys = tuple(
                AnimationKey(time, value)
                for time, value in cur.read_many(KEY_STRUCT, key_count)
            )
            keyframes.append(AnimationKeyframe(frame_index, keys, unk1, unk2))

        return AnimationHeader(
            frame_length=frame_length,
            anim_speed=speed,
            play_offset=play_offset,
            keyframes=tuple(keyframes),
        )

    def _read_raw_texture(self):
        if self.cursor.remaining < TEXTURE_BLOCK_SIZE:
            raise TruncatedFile(
                f"Texture block needs {TEXTURE_BLOCK_SIZE} bytes, "
                f"{self.cursor.remaining} available"
            )
        return tuple(word for (word,) in self.cursor.read_many(_WORD, TEXTURE_WORD_COUNT))

    def _read_compressed_texture(self):
        """Expand the run-length encoded texture block.

        Format:
            u32 compressed size in bytes
            repeated:
                u16 code
                code & 0x8000: (0x10000 - code) literal u32 words follow
                otherwise:     one u32 word follows, repeated `code` times
        """
        size = self.cursor.u32()
        block = ByteCursor(self.cursor.read_bytes(size))

        words = []
        while block.remaining:
            code = block.read(_RLE_CODE)[0]
            if code & RLE_LITERAL_BIT:
                count = 0x10000 - code
                run = [word for (word,) in block.read_many(_WORD, count)]
            else:
                run = [block.read(_WORD)[0]] * code
            if len(words) + len(run) > TEXTURE_WORD_COUNT:
                raise InvalidTextureDimensions(
                    f"Compressed texture expands past {TEXTURE_WORD_COUNT} texels"
                )
            words.extend(run)

        if len(words) != TEXTURE_WORD_COUNT:
            raise InvalidTextureDimensions(
                f"Compressed texture expands to {len(words)} texels, "
                f"expected {TEXTURE_WORD_COUNT}"
            )
        return tuple(words)


def decode_icon(data, limits=None):
    """Decode an icon file buffer into a RawIcon.

    Args:
        data: bytes-like object holding the entire file
        limits: optional DecodeLimits; defaults are used when omitted

    Returns:
        RawIcon

    Raises:
        MalformedHeader, TruncatedFile, IndexOutOfRange,
        InvalidTextureDimensions
    """
    return IconReader(data, limits).read()
