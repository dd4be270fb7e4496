# Reexport all handlers

from .document import (
    handle_load_document,
    handle_page_rendered,
    handle_render_page,
    handle_reset,
    handle_set_zoom,
)
from .export import handle_export
from .placement import (
    handle_list,
    handle_move,
    handle_place,
    handle_remove,
    handle_resize,
)

__all__ = [
    "handle_export",
    "handle_list",
    "handle_load_document",
    "handle_move",
    "handle_page_rendered",
    "handle_place",
    "handle_remove",
    "handle_render_page",
    "handle_reset",
    "handle_resize",
    "handle_set_zoom",
]
