"""Builders for synthetic icon files used by the tests."""

import struct

from ps2icon.icon_format.icon_constants import (
    ICON_MAGIC, TEXTURE_FLAG_COMPRESSED, TEXTURE_WORD_COUNT,
)

# Three vertices whose coordinates are exact in 4.12 fixed point
TRIANGLE_POSITIONS = [(0.5, 1.0, -2.0), (1.5, -0.25, 0.0), (-1.0, 2.0, 3.0)]
TRIANGLE_NORMALS = [(0.0, 0.0, 1.0), (0.0, 1.0, 0.0), (1.0, 0.0, 0.0)]
TRIANGLE_UVS = [(0.0, 0.0), (1.0, 0.0), (0.5, 0.75)]
TRIANGLE_COLORS = [(255, 0, 0, 128), (0, 255, 0, 128), (0, 0, 255, 128)]

PATTERN_WORD = 0x80FF4020  # A=0x80, R=0xFF, G=0x40, B=0x20


def fixed(value):
    return int(round(value * 4096))


def row_coded_texture():
    """Texture whose red channel holds the stored row and green the column."""
    return [
        (0xFF << 24) | (row << 16) | (col << 8) | 0x5A
        for row in range(128) for col in range(128)
    ]


def pack_raw_texture(words):
    return struct.pack(f"<{len(words)}I", *words)


def pack_rle_texture(runs):
    """Encode a list of ('repeat', word, count) / ('literal', [words]) runs."""
    body = bytearray()
    for run in runs:
        if run[0] == "repeat":
            _, word, count = run
            body += struct.pack("<HI", count, word)
        else:
            words = run[1]
            body += struct.pack("<H", 0x10000 - len(words))
            body += struct.pack(f"<{len(words)}I", *words)
    return struct.pack("<I", len(body)) + bytes(body)


def pack_animation(frame_length=60, speed=1.0, play_offset=0, keyframes=(), anim_id=1):
    """keyframes: iterable of (frame_index, [(time, value), ...])."""
    keyframes = list(keyframes)
    data = struct.pack("<IIfII", anim_id, frame_length, speed, play_offset, len(keyframes))
    for frame_index, keys in keyframes:
        data += struct.pack("<IIII", frame_index, len(keys), 0, 0)
        for time, value in keys:
            data += struct.pack("<ff", time, value)
    return data


def build_icon(frames=None, normals=None, uvs=None, colors=None,
               shapes=None, texture=None, texture_block=None,
               animation=b"", texture_type=0x07, magic=ICON_MAGIC,
               vertex_count=None, shape_count=None, frame_count=None):
    """Assemble an icon file.

    frames: list of per-frame position lists (default: one frame, 3 vertices)
    shapes: list of (name, [(i0, i1, i2), ...])
    texture: list of 16384 words (default: PATTERN_WORD everywhere)
    texture_block: raw bytes that replace the texture block entirely
    """
    if frames is None:
        frames = [TRIANGLE_POSITIONS]
    normals = TRIANGLE_NORMALS if normals is None else normals
    uvs = TRIANGLE_UVS if uvs is None else uvs
    colors = TRIANGLE_COLORS if colors is None else colors
    if shapes is None:
        shapes = [("body", [(0, 1, 2)])]

    n_verts = len(frames[0]) if vertex_count is None else vertex_count
    n_frames = len(frames) if frame_count is None else frame_count
    n_shapes = len(shapes) if shape_count is None else shape_count

    data = bytearray(struct.pack("<IIIfII", magic, n_frames, texture_type, 1.0,
                                 n_verts, n_shapes))

    for i in range(len(frames[0])):
        for frame in frames:
            x, y, z = frame[i]
            data += struct.pack("<hhhh", fixed(x), fixed(y), fixed(z), 0)
        nx, ny, nz = normals[i]
        data += struct.pack("<hhhh", fixed(nx), fixed(ny), fixed(nz), 0)
        u, v = uvs[i]
        data += struct.pack("<hh", fixed(u), fixed(v))
        data += struct.pack("<BBBB", *colors[i])

    for name, triangles in shapes:
        encoded = name.encode("ascii")
        data += struct.pack("<B", len(encoded)) + encoded
        data += struct.pack("<I", len(triangles))
        for tri in triangles:
            data += struct.pack("<III", *tri)

    data += animation

    if texture_block is not None:
        data += texture_block
    else:
        if texture is None:
            texture = [PATTERN_WORD] * TEXTURE_WORD_COUNT
        data += pack_raw_texture(texture)

    return bytes(data)


def build_compressed_icon(**kwargs):
    """Small icon whose texture is a single RLE run of PATTERN_WORD."""
    kwargs.setdefault("texture_type", 0x07 | TEXTURE_FLAG_COMPRESSED)
    kwargs.setdefault("texture_block", pack_rle_texture([
        ("repeat", PATTERN_WORD, 0x4000),
    ]))
    return build_icon(**kwargs)
