"""LLM scoring of stored articles."""

from .engine import ScoreStats, ScoringEngine
from .extract import extract_score, parse_score
from .llm_provider import CompletionProvider, OpenAIProvider, build_provider
from .prompt import (
    DEFAULT_PROMPT_TEMPLATE,
    MAX_AI_CONTENT_LENGTH,
    compile_prompt_template,
    load_prompt_source,
    render_prompt,
)

__all__ = [
    "CompletionProvider",
    "DEFAULT_PROMPT_TEMPLATE",
    "MAX_AI_CONTENT_LENGTH",
    "OpenAIProvider",
    "ScoreStats",
    "ScoringEngine",
    "build_provider",
    "compile_prompt_template",
    "extract_score",
    "load_prompt_source",
    "parse_score",
    "render_prompt",
]
