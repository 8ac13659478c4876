from mpilines.structs import Pixel, Point, Line
from mpilines.image import Image
from mpilines.blend import blend_alpha, blend_channel, blend_pixel
from mpilines.coverage import coverage, accumulated_coverage
from mpilines.rasterizer import major_axis, scanline_span, rasterize, render_line, render_lines

__all__ = [
    "Pixel", "Point", "Line", "Image",
    "blend_alpha", "blend_channel", "blend_pixel",
    "coverage", "accumulated_coverage",
    "major_axis", "scanline_span", "rasterize", "render_line", "render_lines",
]
