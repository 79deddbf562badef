"""Prompt templates for article scoring."""

import re
from pathlib import Path
from typing import Optional

from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError

from ..errors import ConfigError
from ..models import Article

MAX_AI_CONTENT_LENGTH = 4096

DEFAULT_PROMPT_TEMPLATE = (
    "Scott likes projects relating to vintage computers and speech synthesizers. "
    "In particular he like the 4004, 8008, 8080, 8085, 8086, z80, and z8000 cpus. "
    "He ikes unique display technologies like nixie tubes. "
    "He likes raspberry pi and microcontroller projects if there is something unique or retro about them. "
    "He likes restoring old or rare computers. Produce a numeric score between 0 and 100 "
    "If the article is about Scott Baker or smbaker, give it a score of 100. "
    "based on how much scott will like this project, please exactly three bullet points on what he will like.\n\n"
    "Title: {{ Title }}\nDescription: {{ Description }}\nContent: {{ Content }}"
)

# {{.Title}} style placeholders, as written in older prompt files
_DOTTED_PLACEHOLDER = re.compile(r"\{\{-?\s*\.(\w+)\s*-?\}\}")

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def load_prompt_source(value: Optional[str]) -> str:
    """
    Resolve the configured prompt to template text.

    An empty value selects the default prompt; ``@path`` reads the
    template from a file; anything else is the template itself.
    """
    if not value:
        return DEFAULT_PROMPT_TEMPLATE
    if value.startswith("@"):
        path = Path(value[1:]).expanduser()
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"error reading prompt file {path}: {e}") from e
    return value


def compile_prompt_template(source: str) -> Template:
    """
    Compile prompt text into a template.

    Raises:
        ConfigError: if the template does not parse
    """
    source = _DOTTED_PLACEHOLDER.sub(r"{{ \1 }}", source)
    try:
        return _env.from_string(source)
    except TemplateSyntaxError as e:
        raise ConfigError(f"error parsing prompt template: {e}") from e


def render_prompt(
    template: Template, article: Article, content_limit: int = MAX_AI_CONTENT_LENGTH
) -> str:
    """Render the prompt for one article.

    Raises jinja2's UndefinedError when the template names an unknown field.
    """
    return template.render(
        Title=article.title,
        Description=article.description,
        Content=article.content[:content_limit],
    )
