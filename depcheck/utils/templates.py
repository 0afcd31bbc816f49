"""Contains utilities for rendering issue templates with Jinja2.

Templates may use the Go style placeholders ``{{.Name}}``, ``{{.CurrentVersion}}``
and ``{{.LatestVersion}}``. These are rewritten into plain Jinja2 variable
references before compilation.
"""

import re

import jinja2
import structlog

from depcheck.schemas.dependency import Dependency

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

GO_STYLE_FIELD_PATTERN = re.compile(r"\{\{(-?)\s*\.([A-Za-z_][A-Za-z0-9_]*)\s*(-?)\}\}")

# Jinja2 statement and comment openers. Go templates have neither, so they are literal text.
JINJA2_LITERAL_DELIMITER_PATTERN = re.compile(r"(?<!\{)\{([%#])")


def translate_go_style_placeholders(template_string: str) -> str:
    """Rewrite ``{{.Field}}`` placeholders as ``{{ Field }}``.

    Literal ``{%`` and ``{#`` are escaped so they render as written.
    """
    escaped = JINJA2_LITERAL_DELIMITER_PATTERN.sub(lambda match: "{{ '{" + match.group(1) + "' }}", template_string)
    return GO_STYLE_FIELD_PATTERN.sub(r"{{\1 \2 \3}}", escaped)


def construct_jinja2_environment() -> jinja2.Environment:
    """Construct a Jinja2 environment."""
    jinja_env = jinja2.Environment(undefined=jinja2.StrictUndefined, keep_trailing_newline=True)
    return jinja_env


def construct_jinja2_template_from_string(template_string: str, environment: jinja2.Environment | None = None) -> jinja2.Template:
    """Construct a Jinja2 template from a string, accepting Go style placeholders.

    Raises:
        jinja2.TemplateSyntaxError: If the template cannot be parsed.
    """
    if environment is None:
        environment = construct_jinja2_environment()
    return environment.from_string(translate_go_style_placeholders(template_string))


def render_template_with_dependency(dependency: Dependency, template: jinja2.Template) -> str:
    """Render a Jinja2 template against a dependency."""
    try:
        rendered_template = template.render(dependency.template_context())
    except jinja2.UndefinedError as exc:
        logger.error("Failed to render template with dependency", dependency=dependency.name, error=str(exc))
        raise
    return rendered_template
