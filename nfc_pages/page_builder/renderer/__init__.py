"""Renderer HTML des documents."""
from .html import (
    render,
    render_component,
    render_page,
    render_not_assigned,
    render_not_found,
)

__all__ = ["render", "render_component", "render_page", "render_not_assigned", "render_not_found"]
