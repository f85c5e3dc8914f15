"""Template rendering engine."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    Template,
)

from ..core.models import RenderOptions

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "10-loggly.conf.j2"


def rsyslog_quote(value: object) -> str:
    """Escape a value for use inside a double-quoted rsyslog template string."""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


def _environment(loader: BaseLoader) -> Environment:
    env = Environment(
        loader=loader,
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["rsyslog_quote"] = rsyslog_quote
    return env


def load_template(template_path: Path | None = None) -> Template:
    """Load the bundled template, or a custom one from a file path.

    Args:
        template_path: Optional path to a replacement template

    Returns:
        Compiled Jinja2 template
    """
    if template_path is None:
        return _environment(PackageLoader("loggly_rsyslog", "templates")).get_template(
            DEFAULT_TEMPLATE
        )

    if not template_path.exists():
        raise FileNotFoundError(f"Template not found: {template_path}")

    # Use template's parent directory as loader search path
    loader = FileSystemLoader(str(template_path.parent))
    return _environment(loader).get_template(template_path.name)


def render_config(options: RenderOptions, template_path: Path | None = None) -> str:
    """Render the rsyslog configuration text.

    Rendering is pure: identical options always produce identical text.

    Args:
        options: Assembled render options
        template_path: Optional replacement template

    Returns:
        Configuration file contents
    """
    logger.debug(f"Rendering template: {template_path or DEFAULT_TEMPLATE}")

    template = load_template(template_path)
    return template.render(**options.model_dump())
