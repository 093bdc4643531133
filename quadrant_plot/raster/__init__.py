from .canvas import draw_pixel, draw_span, new_canvas
from .draw_lines import clip_segment, draw_segment, segment_pixels
from .draw_markers import draw_disc, fill_polygon
from .draw_text import draw_text, text_size

__all__ = [
    "clip_segment",
    "draw_disc",
    "draw_pixel",
    "draw_segment",
    "draw_span",
    "draw_text",
    "fill_polygon",
    "new_canvas",
    "segment_pixels",
    "text_size",
]
