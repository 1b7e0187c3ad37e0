"""Template rendering utilities for consistent Jinja2 rendering across the project."""

from __future__ import annotations

import os

from jinja2 import Environment, FileSystemLoader

from ..comparator import render_value


def _get_template_directories() -> list[str]:
    """Resolve template search paths.

    Supports both source checkout and installed site-packages layouts.
    """

    # Base dir is .../crd_schema_compat/file_io
    base_dir = os.path.dirname(os.path.abspath(__file__))
    core_template_dir = os.path.abspath(os.path.join(base_dir, "../templates"))

    if os.path.exists(core_template_dir):
        return [core_template_dir]
    return []


class TemplateRenderer:
    """Unified template rendering utility."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            template_dirs = _get_template_directories()
        elif isinstance(template_dir, str):
            template_dirs = [template_dir]
        else:
            template_dirs = list(template_dir)

        self.template_dirs = template_dirs
        self.env = Environment(
            loader=FileSystemLoader(self.template_dirs),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=False,
        )
        self.env.filters["render_value"] = render_value

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)
