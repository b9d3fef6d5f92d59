bl_info = {
    "name": "PS2 Icon Format",
    "author": "ps2icon contributors",
    "version": (1, 0, 0),
    "blender": (4, 2, 0),
    "location": "File > Import",
    "description": "Import PlayStation 2 save icons (.icn/.ico) with texture and animation frames.",
    "category": "Import-Export",
}

__version__ = "1.0.0"


def register():
    # bpy is only importable inside Blender; the decoder and CLI never need it
    from . import operators
    operators.register()


def unregister():
    from . import operators
    operators.unregister()
