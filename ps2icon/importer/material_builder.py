"""Build Blender images and materials from normalized icon textures."""

import bpy


def build_image(raster, name="PS2Icon_Texture"):
    """Create a packed Blender image from a RasterImage.

    Args:
        raster: RasterImage from utils.image_convert.normalize_texture()
        name: Blender image name

    Returns:
        bpy.types.Image
    """
    w = raster.width
    h = raster.height
    bl_image = bpy.data.images.new(name=name, width=w, height=h, alpha=True)

    # Blender expects float pixels in range 0.0-1.0, bottom-to-top row order
    # Our data is top-to-bottom, so we need to flip vertically
    pixels = raster.pixels
    float_pixels = [0.0] * (w * h * 4)
    for y in range(h):
        src_base = y * w * 4
        dst_base = (h - 1 - y) * w * 4
        for i in range(w * 4):
            float_pixels[dst_base + i] = pixels[src_base + i] / 255.0

    bl_image.pixels.foreach_set(float_pixels)

    # Pack into blend file so it's not lost
    bl_image.pack()
    return bl_image


def build_material(image=None, name="PS2Icon_Material"):
    """Create a Principled BSDF material sampling the icon texture.

    Args:
        image: bpy.types.Image or None for an untextured material
        name: material name

    Returns:
        bpy.types.Material
    """
    mat = bpy.data.materials.new(name=name)
    mat.use_nodes = True
    nodes = mat.node_tree.nodes
    links = mat.node_tree.links

    nodes.clear()

    output_node = nodes.new(type='ShaderNodeOutputMaterial')
    output_node.location = (400, 0)

    bsdf = nodes.new(type='ShaderNodeBsdfPrincipled')
    bsdf.location = (0, 0)
    bsdf.inputs['Roughness'].default_value = 1.0
    links.new(bsdf.outputs['BSDF'], output_node.inputs['Surface'])

    if image is not None:
        tex_node = nodes.new(type='ShaderNodeTexImage')
        tex_node.location = (-400, 0)
        tex_node.image = image
        tex_node.interpolation = 'Closest'
        links.new(tex_node.outputs['Color'], bsdf.inputs['Base Color'])

    return mat
