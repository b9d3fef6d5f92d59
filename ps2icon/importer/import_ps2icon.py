"""PS2 icon import operator for Blender.

Reads an icon file and creates a Blender object with mesh, normals, UVs,
vertex colors, texture material and one shape key per animation frame.
"""

import logging
import os
import time

import bpy

from ..converter.mesh_builder import build_mesh
from ..errors import IconError
from ..pipeline import read_icon
from ..utils.image_convert import normalize_texture
from .material_builder import build_image, build_material
from .mesh_builder import add_frame_shape_keys, build_blender_mesh

_log = logging.getLogger("ps2icon.blender")


def import_ps2icon(context, filepath, operator=None):
    """Import a PS2 icon file into the current Blender scene.

    Args:
        context: Blender context
        filepath: path to the icon file
        operator: the import operator (for options and error reporting)

    Returns:
        {'FINISHED'} or {'CANCELLED'}
    """
    t_start = time.time()
    basename = os.path.splitext(os.path.basename(filepath))[0]

    options = {
        'scale': 1.0,
        'import_normals': True,
        'import_uvs': True,
        'import_vertex_colors': True,
        'import_texture': True,
        'import_frames': True,
        'uv_v_flip': True,
    }
    if operator is not None:
        for key in options:
            options[key] = getattr(operator, key, options[key])

    try:
        icon = read_icon(filepath)
        mesh = build_mesh(icon, scale=options['scale'])
    except (OSError, IconError) as e:
        _report(operator, 'ERROR', f"Failed to read PS2 icon: {e}")
        return {'CANCELLED'}

    obj = build_blender_mesh(mesh, name=basename, options=options)
    if obj is None:
        _report(operator, 'WARNING', "No geometry found in PS2 icon")
        return {'CANCELLED'}

    if options['import_texture']:
        try:
            raster = normalize_texture(icon.texture)
        except IconError as e:
            _report(operator, 'WARNING', f"Skipping texture: {e}")
        else:
            image = build_image(raster, name=f"{basename}_texture")
            obj.data.materials.append(build_material(image, name=basename))

    if options['import_frames'] and icon.is_animated:
        keys = add_frame_shape_keys(obj, icon, scale=options['scale'])
        _report(operator, 'INFO', f"Added {len(keys)} animation frame shape keys")

    context.collection.objects.link(obj)
    bpy.ops.object.select_all(action='DESELECT')
    obj.select_set(True)
    context.view_layer.objects.active = obj

    _log.debug("Imported %r in %.2fs", filepath, time.time() - t_start)
    _report(operator, 'INFO',
            f"Imported {basename}: {mesh.num_verts} vertices, "
            f"{mesh.num_faces} triangles, {icon.frame_count} frame(s)")
    return {'FINISHED'}


def _report(operator, level, message):
    """Report a message through the operator or the log."""
    if operator is not None and hasattr(operator, 'report'):
        operator.report({level}, message)
    else:
        _log.log(logging.getLevelName(level), message)
