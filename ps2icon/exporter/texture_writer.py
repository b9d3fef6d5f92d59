"""Raster image output via Pillow."""

from pathlib import Path

from PIL import Image

# Output container used when the path has no recognised extension
DEFAULT_FORMAT = "TGA"


def raster_to_image(raster):
    """Wrap a RasterImage in a Pillow RGBA image."""
    return Image.frombytes("RGBA", (raster.width, raster.height), bytes(raster.pixels))


def write_texture(raster, filepath, image_format=None):
    """Write a RasterImage to disk.

    Args:
        raster: RasterImage from normalize_texture()
        filepath: destination path; its extension picks the container
        image_format: explicit Pillow format name, overrides the extension

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    if image_format is None:
        ext = path.suffix.lower()
        if ext not in Image.registered_extensions():
            image_format = DEFAULT_FORMAT
    image = raster_to_image(raster)
    image.save(path, format=image_format)
    return path
