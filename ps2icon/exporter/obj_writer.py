"""Wavefront OBJ and MTL output for converted icon meshes.

One object per file. Every vertex carries its own position, texture
coordinate and normal, so face records use the same index for all three:

    f 1/1/1 2/2/2 3/3/3

Each icon shape becomes a `g` group.
"""

import re
from pathlib import Path


def sanitize_name(name):
    """Make a name safe for OBJ/MTL statements (no whitespace)."""
    cleaned = re.sub(r"[^0-9A-Za-z_.\-]+", "_", name).strip("_")
    return cleaned or "unnamed"


def format_obj(mesh, name="icon", material_name=None, mtl_filename=None, flip_v=False):
    """Render a Mesh as OBJ text.

    Args:
        mesh: Mesh from build_mesh()
        name: object name for the `o` statement
        material_name: material referenced with `usemtl` (optional)
        mtl_filename: material library referenced with `mtllib` (optional)
        flip_v: write v as 1 - v (for viewers with a bottom-left UV origin)

    Returns:
        str
    """
    lines = ["# PS2 icon converted by ps2icon"]
    if mtl_filename:
        lines.append(f"mtllib {mtl_filename}")
    lines.append(f"o {sanitize_name(name)}")

    for x, y, z in mesh.positions:
        lines.append(f"v {x:.6f} {y:.6f} {z:.6f}")
    for u, v in mesh.uvs:
        if flip_v:
            v = 1.0 - v
        lines.append(f"vt {u:.6f} {v:.6f}")
    for nx, ny, nz in mesh.normals:
        lines.append(f"vn {nx:.6f} {ny:.6f} {nz:.6f}")

    if material_name:
        lines.append(f"usemtl {sanitize_name(material_name)}")

    if mesh.groups:
        for group in mesh.groups:
            lines.append(f"g {sanitize_name(group.name)}")
            lines.extend(_face_lines(mesh.group_faces(group)))
    else:
        lines.extend(_face_lines(mesh.faces))

    return "\n".join(lines) + "\n"


def _face_lines(faces):
    for a, b, c in faces:
        a, b, c = a + 1, b + 1, c + 1
        yield f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}"


def write_obj(mesh, filepath, name=None, material_name=None, mtl_filename=None,
              flip_v=False):
    """Write a Mesh to an OBJ file.

    Args:
        mesh: Mesh from build_mesh()
        filepath: destination path
        name: object name, defaults to the file stem

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    if name is None:
        name = path.stem
    text = format_obj(mesh, name, material_name, mtl_filename, flip_v)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(text)
    return path


def format_mtl(material_name, texture_filename=None):
    """Render a single-material MTL library.

    The icon's lighting comes from its texture and vertex colors, so the
    material is plain white diffuse with the texture as map_Kd.
    """
    lines = [
        "# PS2 icon material",
        f"newmtl {sanitize_name(material_name)}",
        "Ka 1.000000 1.000000 1.000000",
        "Kd 1.000000 1.000000 1.000000",
        "Ks 0.000000 0.000000 0.000000",
        "d 1.000000",
        "illum 1",
    ]
    if texture_filename:
        lines.append(f"map_Kd {texture_filename}")
    return "\n".join(lines) + "\n"


def write_mtl(filepath, material_name, texture_filename=None):
    """Write an MTL library next to an OBJ file.

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(format_mtl(material_name, texture_filename))
    return path
