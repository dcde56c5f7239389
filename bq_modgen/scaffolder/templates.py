"""Jinja2 template rendering for module scaffolding.

Provides the ``TemplateRenderer`` used by the text-template processor.
Templates are loaded through the template store rather than a Jinja2 loader,
so the renderer only ever works on template strings.  Undefined variables
render as empty strings.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, select_autoescape


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 template strings with a property-derived context.

    The environment keeps trailing newlines and trims block tags so that
    rendered Java and XML files look hand-written.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context.

        Args:
            template_string: Jinja2 template source.
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.from_string(template_string)
        return template.render(**context)
