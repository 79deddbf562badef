"""Article scoring against a preference prompt."""

import logging
from typing import Callable, List, Optional, Union

from jinja2 import Template
from pydantic import BaseModel, Field
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from ..db import ArticleStore
from ..errors import CompletionError, NotFoundError
from ..models import Article
from .extract import extract_score
from .llm_provider import CompletionProvider
from .prompt import MAX_AI_CONTENT_LENGTH, render_prompt

log = logging.getLogger(__name__)
console = Console()

RULE = "-" * 80


class ScoreStats(BaseModel):
    """Counts from one scoring pass."""

    candidates: int = Field(0, description="Articles selected for scoring")
    scored: int = Field(0, description="Articles whose score was stored")
    skipped: int = Field(0, description="Articles skipped after an error")


class ScoringEngine:
    """Score stored articles one at a time with a completion provider."""

    def __init__(
        self,
        store: ArticleStore,
        provider: Union[CompletionProvider, Callable[[], CompletionProvider]],
        template: Template,
        model: str,
        content_limit: int = MAX_AI_CONTENT_LENGTH,
    ) -> None:
        """
        Initialize scoring engine.

        Args:
            store: Article store
            provider: Completion provider, or a factory called the first
                time there is something to score
            template: Compiled prompt template
            model: Model name recorded with each score
            content_limit: Max content characters substituted into the prompt
        """
        self.store = store
        self._provider: Optional[CompletionProvider] = None
        self._provider_factory: Optional[Callable[[], CompletionProvider]] = None
        if isinstance(provider, CompletionProvider):
            self._provider = provider
        else:
            self._provider_factory = provider
        self.template = template
        self.model = model
        self.content_limit = content_limit

    @property
    def provider(self) -> CompletionProvider:
        if self._provider is None:
            self._provider = self._provider_factory()
        return self._provider

    @property
    def provider_ready(self) -> bool:
        return self._provider is not None

    def select_candidates(self, refresh_pattern: Optional[str] = None) -> List[Article]:
        """Unscored articles plus any whose title matches ``refresh_pattern``."""
        return self.store.select_unscored(refresh_pattern)

    def render_prompt(self, article: Article) -> str:
        return render_prompt(self.template, article, self.content_limit)

    def score(self, prompt: str) -> str:
        """Send a rendered prompt and return the raw response text."""
        return self.provider.complete(prompt)

    def run(self, refresh_pattern: Optional[str] = None, show_response: bool = False) -> ScoreStats:
        """
        Score every candidate article sequentially.

        Errors for one article are logged and that article is skipped; the
        rest of the batch still runs.
        """
        articles = self.select_candidates(refresh_pattern)
        stats = ScoreStats(candidates=len(articles))

        if not articles:
            console.print("No unscored articles found.")
            return stats

        console.print(f"found {len(articles)} unscored articles")
        # A missing API key fails here, before the first article.
        self.provider

        for article in articles:
            console.print(f"Scoring: {article.title}", markup=False)

            try:
                prompt = self.render_prompt(article)
            except Exception as e:
                log.error("Error executing prompt template for %s: %s", article.title, e)
                stats.skipped += 1
                continue

            try:
                response = self.score(prompt)
            except CompletionError as e:
                log.error("%s", e)
                stats.skipped += 1
                continue

            if show_response:
                console.print(RULE)
                console.print(response, markup=False)
                console.print(RULE)

            score = extract_score(response)
            console.print(f"  Score: {score}")

            try:
                self.store.update_score(article.guid, score, response, self.model)
            except (NotFoundError, SQLAlchemyError) as e:
                log.error("Error updating score for %s: %s", article.title, e)
                stats.skipped += 1
                continue

            stats.scored += 1

        return stats
