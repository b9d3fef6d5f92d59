"""Python representations of a decoded PS2 icon."""

from dataclasses import dataclass
from typing import Optional, Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Color = Tuple[int, int, int, int]
Triangle = Tuple[int, int, int]


@dataclass(frozen=True)
class Shape:
    """A named group of triangles indexing the icon's vertex pool."""

    name: str
    triangles: Tuple[Triangle, ...]

    @property
    def triangle_count(self):
        return len(self.triangles)


@dataclass(frozen=True)
class AnimationKey:
    time: float
    value: float


@dataclass(frozen=True)
class AnimationKeyframe:
    """Keys for a single frame (position set) of the icon."""

    frame_index: int
    keys: Tuple[AnimationKey, ...]
    unknown1: int = 0
    unknown2: int = 0


@dataclass(frozen=True)
class AnimationHeader:
    frame_length: int
    anim_speed: float
    play_offset: int
    keyframes: Tuple[AnimationKeyframe, ...]


@dataclass(frozen=True)
class RawIcon:
    """Fully decoded icon, before any normalization.

    `frames[f][i]` is the position of vertex i in frame f. Normals, UVs and
    colors are shared by all frames. `texture` holds the 128x128 packed
    ARGB words exactly as stored.
    """

    vertex_count: int
    shape_count: int
    frame_count: int
    texture_type: int
    frames: Tuple[Tuple[Vec3, ...], ...]
    normals: Tuple[Vec3, ...]
    uvs: Tuple[Vec2, ...]
    colors: Tuple[Color, ...]
    shapes: Tuple[Shape, ...]
    texture: Tuple[int, ...]
    animation: Optional[AnimationHeader] = None

    @property
    def vertices(self):
        """Positions of the base pose (frame 0)."""
        return self.frames[0]

    @property
    def is_animated(self):
        return self.frame_count > 1

    @property
    def triangle_count(self):
        return sum(shape.triangle_count for shape in self.shapes)

    def positions(self, frame=0):
        return self.frames[frame]

    def __repr__(self):
        return (
            f"RawIcon(vertices={self.vertex_count}, shapes={self.shape_count}, "
            f"frames={self.frame_count}, triangles={self.triangle_count})"
        )
