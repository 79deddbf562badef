import pytest
from jinja2 import UndefinedError

from airss.errors import ConfigError
from airss.scoring import (
    DEFAULT_PROMPT_TEMPLATE,
    compile_prompt_template,
    load_prompt_source,
    render_prompt,
)


def test_load_prompt_source_defaults():
    assert load_prompt_source(None) == DEFAULT_PROMPT_TEMPLATE
    assert load_prompt_source("") == DEFAULT_PROMPT_TEMPLATE
    assert load_prompt_source("Rate {{ Title }}") == "Rate {{ Title }}"


def test_load_prompt_source_from_file(tmp_path):
    prompt_file = tmp_path / "prompt.txt"
    prompt_file.write_text("Rate this: {{ Title }}\n")
    assert load_prompt_source(f"@{prompt_file}") == "Rate this: {{ Title }}\n"


def test_load_prompt_source_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_prompt_source(f"@{tmp_path / 'nope.txt'}")


def test_default_template_renders_article_fields(make_article):
    template = compile_prompt_template(DEFAULT_PROMPT_TEMPLATE)
    article = make_article("g1", title="Z80 Project", description="retro", content="lots of detail")

    prompt = render_prompt(template, article)

    assert "Title: Z80 Project\nDescription: retro\nContent: lots of detail" in prompt
    assert prompt.startswith("Scott likes projects")


def test_dotted_placeholders_are_accepted(make_article):
    template = compile_prompt_template("T={{.Title}} D={{ .Description }}")
    article = make_article("g1", title="A & B", description="<b>x</b>")
    # Prompts are plain text, nothing is escaped
    assert render_prompt(template, article) == "T=A & B D=<b>x</b>"


def test_content_is_truncated(make_article):
    template = compile_prompt_template("{{ Content }}")
    article = make_article("g1", content="x" * 5000)
    assert len(render_prompt(template, article)) == 4096
    assert render_prompt(template, article, content_limit=10) == "x" * 10


def test_unknown_field_fails_at_render(make_article):
    template = compile_prompt_template("{{ Author }}")
    with pytest.raises(UndefinedError):
        render_prompt(template, make_article("g1"))


def test_syntax_error_is_config_error():
    with pytest.raises(ConfigError):
        compile_prompt_template("{% if Title %}unterminated")
