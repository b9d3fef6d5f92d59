"""Blender operator and menu entry for importing PS2 icons."""

import bpy
from bpy.props import BoolProperty, FloatProperty, StringProperty
from bpy_extras.io_utils import ImportHelper


class ImportPS2Icon(bpy.types.Operator, ImportHelper):
    """Import a PlayStation 2 save icon"""
    bl_idname = "import_scene.ps2icon"
    bl_label = "Import PS2 Icon"
    bl_options = {'REGISTER', 'UNDO'}

    filename_ext = ".icn"

    filter_glob: StringProperty(
        default="*.icn;*.ico",
        options={'HIDDEN'},
    )

    scale: FloatProperty(
        name="Scale",
        description="Scale factor for vertex positions",
        default=1.0, min=0.0001, max=1000.0,
    )

    import_normals: BoolProperty(
        name="Import Normals",
        description="Import vertex normals from the icon",
        default=True,
    )

    import_uvs: BoolProperty(
        name="Import UVs",
        description="Import texture coordinates",
        default=True,
    )

    import_vertex_colors: BoolProperty(
        name="Import Vertex Colors",
        description="Import per-vertex shading colors",
        default=True,
    )

    import_texture: BoolProperty(
        name="Import Texture",
        description="Create a material with the icon's 128x128 texture",
        default=True,
    )

    import_frames: BoolProperty(
        name="Frames as Shape Keys",
        description="Import extra animation frames as shape keys",
        default=True,
    )

    def execute(self, context):
        from .importer.import_ps2icon import import_ps2icon
        return import_ps2icon(context, self.filepath, self)

    def draw(self, context):
        layout = self.layout
        layout.prop(self, "scale")
        layout.separator()
        layout.prop(self, "import_normals")
        layout.prop(self, "import_uvs")
        layout.prop(self, "import_vertex_colors")
        layout.prop(self, "import_texture")
        layout.prop(self, "import_frames")


def menu_func_import(self, context):
    self.layout.operator(ImportPS2Icon.bl_idname, text="PS2 Icon (.icn/.ico)")


def register():
    bpy.utils.register_class(ImportPS2Icon)
    bpy.types.TOPBAR_MT_file_import.append(menu_func_import)


def unregister():
    bpy.types.TOPBAR_MT_file_import.remove(menu_func_import)
    bpy.utils.unregister_class(ImportPS2Icon)
