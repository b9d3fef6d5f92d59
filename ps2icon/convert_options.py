"""Conversion settings passed explicitly through the pipeline."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .icon_format.icon_header import DecodeLimits

DEFAULT_OBJ_OUTPUT = "default.obj"
DEFAULT_TEXTURE_OUTPUT = "default.tga"


@dataclass
class ConvertOptions:
    """Everything one icon conversion needs.

    The CLI fills this from argv; library callers construct it directly.
    """

    input_file: str
    obj_output_file: str = DEFAULT_OBJ_OUTPUT
    texture_output_file: str = DEFAULT_TEXTURE_OUTPUT

    # MTL library written next to the OBJ; None = derive from obj_output_file
    mtl_output_file: Optional[str] = None
    write_material: bool = True

    scale: float = 1.0
    frame: int = 0

    # Write OBJ texture coordinates as v = 1 - v
    flip_v: bool = False

    # 0 warnings only, 1 progress (INFO), 2+ DEBUG
    verbose: int = 0
    limits: DecodeLimits = field(default_factory=DecodeLimits)

    @property
    def mtl_path(self):
        if not self.write_material:
            return None
        if self.mtl_output_file:
            return Path(self.mtl_output_file)
        return Path(self.obj_output_file).with_suffix(".mtl")

    @property
    def material_name(self):
        return Path(self.input_file).stem or "icon"
