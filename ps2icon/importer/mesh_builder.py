"""Build Blender meshes from converted icon meshes.

Converts a Mesh (Y-up, one vertex per index) into a Blender mesh object with:
- Positions, custom normals, UVs, vertex colors
- One shape key per extra animation frame
- Object rotation from Y-up to Blender's Z-up
"""

import bpy
from mathutils import Matrix

from ..converter.mesh_builder import build_mesh

# Rotates Y-up mesh coordinates into Blender's Z-up space: (x, y, z) -> (x, -z, y)
Y_UP_TO_Z_UP = Matrix((
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 0.0, -1.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
))


def build_blender_mesh(mesh, name="PS2Icon", options=None):
    """Create a Blender mesh object from a converted Mesh.

    Args:
        mesh: Mesh from converter.mesh_builder.build_mesh()
        name: name for the Blender mesh and object
        options: import options dict (import_normals, import_uvs,
                 import_vertex_colors, uv_v_flip)

    Returns:
        bpy.types.Object, or None if the mesh has no faces
    """
    if options is None:
        options = {
            'import_normals': True,
            'import_uvs': True,
            'import_vertex_colors': True,
            'uv_v_flip': True,
        }

    if mesh.num_verts == 0 or mesh.num_faces == 0:
        return None

    tri_indices = [i for face in mesh.faces for i in face]
    num_tris = mesh.num_faces

    bl_mesh = bpy.data.meshes.new(name)

    bl_mesh.vertices.add(mesh.num_verts)
    bl_mesh.vertices.foreach_set("co", [c for v in mesh.positions for c in v])

    bl_mesh.loops.add(num_tris * 3)
    bl_mesh.loops.foreach_set("vertex_index", tri_indices)

    bl_mesh.polygons.add(num_tris)
    bl_mesh.polygons.foreach_set("loop_start", [i * 3 for i in range(num_tris)])
    bl_mesh.polygons.foreach_set("loop_total", [3] * num_tris)

    bl_mesh.update()

    if options.get('import_uvs', True) and mesh.uvs:
        _set_uv_layer(bl_mesh, mesh.uvs, tri_indices,
                      uv_v_flip=options.get('uv_v_flip', True))

    if options.get('import_vertex_colors', True) and mesh.colors:
        _set_vertex_colors(bl_mesh, mesh.colors, tri_indices)

    bl_mesh.validate(clean_customdata=False)
    bl_mesh.update()

    # Normals last: validate() may change the loop count
    if options.get('import_normals', True) and mesh.normals:
        _set_custom_normals(bl_mesh, mesh.normals)

    obj = bpy.data.objects.new(name, bl_mesh)
    obj.matrix_world = Y_UP_TO_Z_UP.copy()
    return obj


def add_frame_shape_keys(obj, icon, scale=1.0):
    """Add one shape key per animation frame after the base pose.

    Frame 0 becomes the Basis key; frames 1..N become "Frame N" keys
    holding that frame's positions.
    """
    if icon.frame_count < 2:
        return []

    obj.shape_key_add(name="Basis", from_mix=False)
    keys = []
    for frame in range(1, icon.frame_count):
        positions = build_mesh(icon, scale=scale, frame=frame).positions
        key = obj.shape_key_add(name=f"Frame {frame}", from_mix=False)
        key.data.foreach_set("co", [c for v in positions for c in v])
        keys.append(key)
    return keys


def _set_custom_normals(mesh, normals):
    """Set custom split normals from per-vertex normals."""
    loop_normals = [normals[loop.vertex_index] for loop in mesh.loops]
    mesh.normals_split_custom_set(loop_normals)


def _set_uv_layer(mesh, uvs, tri_indices, layer_name="UVMap", uv_v_flip=True):
    """Set UV coordinates on the mesh.

    Args:
        mesh: Blender mesh data
        uvs: list of (u, v) per vertex
        tri_indices: flat list of triangle vertex indices
        layer_name: name for the UV layer
        uv_v_flip: if True, apply v = 1.0 - v (top-left -> bottom-left origin)
    """
    uv_layer = mesh.uv_layers.new(name=layer_name)
    flat = []
    for idx in tri_indices:
        u, v = uvs[idx]
        flat.extend((u, 1.0 - v) if uv_v_flip else (u, v))
    uv_layer.data.foreach_set("uv", flat)


def _set_vertex_colors(mesh, colors, tri_indices, layer_name="Color"):
    """Set vertex colors on the mesh.

    Args:
        mesh: Blender mesh data
        colors: list of (r, g, b, a) per vertex, 0-255
        tri_indices: flat list of triangle vertex indices
        layer_name: name for the color attribute
    """
    color_attr = mesh.color_attributes.new(
        name=layer_name,
        type='FLOAT_COLOR',
        domain='CORNER'
    )
    flat = []
    for idx in tri_indices:
        flat.extend(c / 255.0 for c in colors[idx])
    color_attr.data.foreach_set("color", flat)
