"""
Stylesheet rendering with Jinja2 templates.
"""

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from iconfont_builder.core.glyphs import Glyph


@dataclass(frozen=True)
class StylesheetContext:
    """Values available to stylesheet templates."""

    glyphs: tuple[Glyph, ...]
    font_name: str
    font_path: str
    class_name: str
    font_date: int

    def as_template_vars(self) -> dict[str, object]:
        """Template variables, named as the templates reference them."""
        return {
            "glyphs": self.glyphs,
            "fontName": self.font_name,
            "fontPath": self.font_path,
            "className": self.class_name,
            "fontDate": self.font_date,
        }


def create_environment(template_dir: Path) -> Environment:
    """Jinja2 environment loading templates from template_dir."""
    return Environment(
        loader=FileSystemLoader(template_dir),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )


def render_template(template_path: Path, context: StylesheetContext) -> str:
    """
    Render a stylesheet template.

    Raises:
        jinja2.TemplateNotFound: If the template file does not exist
        jinja2.TemplateSyntaxError: If the template is invalid
    """
    env = create_environment(template_path.parent)
    template = env.get_template(template_path.name)
    return template.render(context.as_template_vars())


def write_stylesheet(
    template_path: Path,
    output_path: Path,
    context: StylesheetContext,
) -> Path:
    """Render template_path and write the result to output_path."""
    content = render_template(template_path, context)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    return output_path
