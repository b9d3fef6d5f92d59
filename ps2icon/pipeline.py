"""Load an icon, convert it, and write mesh, material and texture files."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .converter.mesh_builder import Mesh, build_mesh
from .exporter.obj_writer import write_mtl, write_obj
from .exporter.texture_writer import write_texture
from .icon_format.icon_objects import RawIcon
from .icon_format.icon_reader import decode_icon
from .utils.image_convert import RasterImage, normalize_texture

_log = logging.getLogger("ps2icon.pipeline")

# Debug logging switch, same effect as a verbosity of 2
_debug_env = os.environ.get('PS2ICON_DEBUG', '') == '1'


def configure_logging(verbosity):
    """Set the ps2icon logger level: 0 WARNING, 1 INFO, 2+ DEBUG.

    Installs a stderr handler on the root logger unless one exists.
    """
    if verbosity > 1 or _debug_env:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(format="%(levelname)s: %(message)s")
    logging.getLogger("ps2icon").setLevel(level)



@dataclass
class ConversionResult:
    icon: RawIcon
    mesh: Mesh
    raster: RasterImage
    written: List[Path] = field(default_factory=list)


def read_icon(filepath, limits=None):
    """Read an icon file from disk and decode it.

    OSError from opening or reading the file propagates before any
    decoding is attempted.
    """
    _log.debug("Reading icon file %r", str(filepath))
    with open(filepath, "rb") as f:
        data = f.read()
    icon = decode_icon(data, limits)
    _log.info("Found geometry - %d vertices, %d shapes.",
              icon.vertex_count, icon.shape_count)
    if icon.is_animated:
        _log.info("Found animation - %d frames.", icon.frame_count)
    return icon


def _relative_reference(target, from_file):
    """Path of `target` as written inside `from_file` (relative, forward slashes).

    Falls back to the absolute path when no relative path exists, e.g. the
    two files are on different Windows drives.
    """
    try:
        rel = os.path.relpath(target, start=Path(from_file).parent)
    except ValueError:
        rel = os.path.abspath(target)
    return rel.replace(os.sep, "/")


def convert(options):
    """Run one complete conversion described by a ConvertOptions.

    Returns:
        ConversionResult with the decoded icon, built mesh, normalized
        texture and the list of files written

    Raises:
        IconError subclasses for bad input, OSError for file problems
    """
    if options.verbose or _debug_env:
        configure_logging(options.verbose)

    icon = read_icon(options.input_file, options.limits)

    _log.debug("Converting geometry data from %r (frame %d, scale %g)",
               options.input_file, options.frame, options.scale)
    mesh = build_mesh(icon, scale=options.scale, frame=options.frame)

    _log.debug("Converting texture data from %r", options.input_file)
    raster = normalize_texture(icon.texture)

    result = ConversionResult(icon=icon, mesh=mesh, raster=raster)

    texture_path = Path(options.texture_output_file)
    mtl_path = options.mtl_path
    material_name = None
    mtl_filename = None
    if mtl_path is not None:
        material_name = options.material_name
        mtl_filename = _relative_reference(mtl_path, Path(options.obj_output_file))
        _log.debug("Writing material library to %r", str(mtl_path))
        result.written.append(write_mtl(
            mtl_path, material_name,
            _relative_reference(texture_path, mtl_path),
        ))

    _log.debug("Writing geometry output to %r", options.obj_output_file)
    result.written.append(write_obj(
        mesh, options.obj_output_file,
        name=Path(options.input_file).stem or None,
        material_name=material_name,
        mtl_filename=mtl_filename,
        flip_v=options.flip_v,
    ))

    _log.debug("Writing texture to %r", str(texture_path))
    result.written.append(write_texture(raster, texture_path))

    return result
