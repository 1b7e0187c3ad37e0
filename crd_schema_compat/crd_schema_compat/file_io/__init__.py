"""File I/O related utilities.

Rendering of verification reports through the bundled Jinja2 templates.
"""

from .template_renderer import TemplateRenderer

__all__ = [
    "TemplateRenderer",
]
