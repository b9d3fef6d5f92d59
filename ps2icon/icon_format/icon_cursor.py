"""Bounds-checked sequential reader over an immutable byte buffer."""

import struct

from ..errors import UnexpectedEof

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_S16 = struct.Struct("<h")
_F32 = struct.Struct("<f")


class ByteCursor:
    """Little-endian reader with a mutable position over read-only data.

    Every read checks the remaining length first and raises UnexpectedEof
    instead of reading past the end. After an UnexpectedEof the position is
    unspecified and the caller must abandon decoding.

    Usage:
        cur = ByteCursor(data)
        magic = cur.u32()
        x, y, z, w = cur.read(COORD_STRUCT)
    """

    __slots__ = ('_data', '_pos')

    def __init__(self, data, offset=0):
        self._data = memoryview(bytes(data)).toreadonly()
        if not 0 <= offset <= len(self._data):
            raise UnexpectedEof(offset, 0, len(self._data))
        self._pos = offset

    def __len__(self):
        return len(self._data)

    @property
    def remaining(self):
        return len(self._data) - self._pos

    def tell(self):
        return self._pos

    def _require(self, size):
        if size < 0 or size > self.remaining:
            raise UnexpectedEof(self._pos, size, self.remaining)

    def read(self, st):
        """Unpack one precompiled struct.Struct at the cursor and advance."""
        self._require(st.size)
        values = st.unpack_from(self._data, self._pos)
        self._pos += st.size
        return values

    def read_many(self, st, count):
        """Unpack `count` consecutive records of `st` and return them as a list."""
        size = st.size * count
        self._require(size)
        start = self._pos
        self._pos += size
        return list(st.iter_unpack(self._data[start:start + size]))

    def peek(self, st):
        """Unpack one struct at the cursor without advancing."""
        self._require(st.size)
        return st.unpack_from(self._data, self._pos)

    def u8(self):
        return self.read(_U8)[0]

    def u16(self):
        return self.read(_U16)[0]

    def u32(self):
        return self.read(_U32)[0]

    def s16(self):
        return self.read(_S16)[0]

    def f32(self):
        return self.read(_F32)[0]

    def peek_u32(self):
        return self.peek(_U32)[0]

    def read_bytes(self, n):
        """Return the next n raw bytes."""
        self._require(n)
        start = self._pos
        self._pos += n
        return bytes(self._data[start:self._pos])

    def skip(self, n):
        self._require(n)
        self._pos += n

    def __repr__(self):
        return f"ByteCursor(pos=0x{self._pos:x}, size=0x{len(self._data):x})"
