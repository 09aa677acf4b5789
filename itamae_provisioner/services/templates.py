"""Command template rendering."""

import logging
from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError

from itamae_provisioner.errors import TemplateError
from itamae_provisioner.models import ExecuteTemplate, InstallTemplate

logger = logging.getLogger(__name__)

# Command strings are shell, not markup: no escaping, no whitespace trimming.
_environment = Environment(
    undefined=StrictUndefined,
    autoescape=False,
    keep_trailing_newline=False,
)


def render(
    template: str,
    data: InstallTemplate | ExecuteTemplate | Mapping[str, Any],
) -> str:
    """Render a command template against a data record.

    Args:
        template: Jinja2 template source
        data: Template view model or plain mapping

    Returns:
        Rendered command string

    Raises:
        TemplateError: If the template is malformed or references a
            name the data record does not provide
    """
    if isinstance(data, (InstallTemplate, ExecuteTemplate)):
        context = data.as_context()
    else:
        context = dict(data)

    try:
        compiled = _environment.from_string(template)
    except TemplateSyntaxError as e:
        raise TemplateError(f"line {e.lineno}: {e.message}") from e

    try:
        rendered = compiled.render(**context)
    except UndefinedError as e:
        raise TemplateError(str(e)) from e

    logger.debug("Rendered template: %s", rendered)
    return rendered
