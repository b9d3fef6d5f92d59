"""Constants for the PS2 icon binary format."""

import struct

# File id stored in the first header word
ICON_MAGIC = 0x00010000

# Header: magic, frame_count, texture_type, reserved (f32), vertex_count, shape_count
HEADER_STRUCT = struct.Struct("<IIIfII")
HEADER_SIZE = HEADER_STRUCT.size  # 24

# Fixed-point scale for positions, normals and texture coordinates (4.12)
FIXED_POINT_ONE = 4096.0

# Per-vertex record components
COORD_STRUCT = struct.Struct("<hhhh")   # x, y, z, w
UV_STRUCT = struct.Struct("<hh")        # u, v
COLOR_STRUCT = struct.Struct("<BBBB")   # r, g, b, a

# Triangle index triple in the shape section
TRIANGLE_STRUCT = struct.Struct("<III")

# Animation section
ANIMATION_ID = 0x01
ANIMATION_HEADER_STRUCT = struct.Struct("<IIfII")  # id, frame_length, speed, play_offset, keyframes
KEYFRAME_STRUCT = struct.Struct("<IIII")           # frame_index, key_count, unknown1, unknown2
KEY_STRUCT = struct.Struct("<ff")                  # time, value

# Texture block
TEXTURE_WIDTH = 128
TEXTURE_HEIGHT = 128
TEXTURE_WORD_COUNT = TEXTURE_WIDTH * TEXTURE_HEIGHT  # 16384
TEXTURE_WORD_SIZE = 4
TEXTURE_BLOCK_SIZE = TEXTURE_WORD_COUNT * TEXTURE_WORD_SIZE  # 65536

# texture_type flag: texture block is run-length encoded
TEXTURE_FLAG_COMPRESSED = 0x08

# RLE code with this bit set introduces a literal run
RLE_LITERAL_BIT = 0x8000


def vertex_record_size(frame_count):
    """Bytes per vertex record for an icon with the given frame count."""
    return (frame_count * COORD_STRUCT.size + COORD_STRUCT.size
            + UV_STRUCT.size + COLOR_STRUCT.size)
