"""Build renderer-agnostic triangle meshes from decoded icons.

Converts a RawIcon into a flat Mesh for one frame:
- Positions from the selected frame, scaled and converted to Y-up
- Normals, UVs and vertex colors copied verbatim by vertex index
- Shape triangles concatenated into one face list, with one FaceGroup per shape

Icons store vertices Y-down; the output mesh negates Y and leaves X and Z
untouched. Nothing is deduplicated or smoothed.
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Tuple

from ..errors import FrameOutOfRange, InvalidScale
from ..icon_format.icon_objects import Color, Triangle, Vec2, Vec3


@dataclass(frozen=True)
class FaceGroup:
    """Slice of Mesh.faces that came from one icon shape."""

    name: str
    start: int
    count: int


@dataclass(frozen=True)
class Mesh:
    positions: Tuple[Vec3, ...]
    normals: Tuple[Vec3, ...]
    uvs: Tuple[Vec2, ...]
    colors: Tuple[Color, ...]
    faces: Tuple[Triangle, ...]
    groups: Tuple[FaceGroup, ...] = ()
    frame: int = 0

    @property
    def num_verts(self):
        return len(self.positions)

    @property
    def num_faces(self):
        return len(self.faces)

    def group_faces(self, group):
        return self.faces[group.start:group.start + group.count]


def _check_scale(scale):
    if isinstance(scale, bool) or not isinstance(scale, Real):
        raise InvalidScale(f"Scale must be a number, got {scale!r}")
    if not math.isfinite(scale) or scale <= 0:
        raise InvalidScale(f"Scale must be positive and finite, got {scale!r}")
    return float(scale)


def build_mesh(icon, scale=1.0, frame=0):
    """Create a Mesh from a decoded icon.

    Args:
        icon: RawIcon from decode_icon()
        scale: uniform multiplier applied to all positions
        frame: which position set to use (0 = base pose)

    Returns:
        Mesh

    Raises:
        InvalidScale: scale is not a positive finite number
        FrameOutOfRange: frame is not in [0, icon.frame_count)
    """
    scale = _check_scale(scale)
    if isinstance(frame, bool) or not isinstance(frame, int) \
            or not 0 <= frame < icon.frame_count:
        raise FrameOutOfRange(
            f"Frame {frame!r} requested but the icon has {icon.frame_count} frame(s)"
        )

    positions = tuple(
        (x * scale, -y * scale, z * scale)
        for x, y, z in icon.frames[frame]
    )

    faces = []
    groups = []
    for shape in icon.shapes:
        groups.append(FaceGroup(shape.name, len(faces), len(shape.triangles)))
        faces.extend(shape.triangles)

    return Mesh(
        positions=positions,
        normals=icon.normals,
        uvs=icon.uvs,
        colors=icon.colors,
        faces=tuple(faces),
        groups=tuple(groups),
        frame=frame,
    )
