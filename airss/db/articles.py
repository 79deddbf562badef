"""Article storage and state transitions."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import false, func, insert, or_, select, true, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import IntegrityError

from ..clock import to_utc_naive
from ..errors import ConstraintError, NotFoundError
from ..models import NOT_SCORED, SCORE_NA, Article
from .patterns import LIKE_ESCAPE, glob_to_store_pattern
from .schema import articles_table as t


def _row_to_article(row: Row) -> Article:
    """Build an Article from a result row, mapping NULLs to defaults."""
    return Article(
        guid=row.guid,
        title=row.title or "",
        link=row.link or "",
        description=row.description or "",
        content=row.content or "",
        published_date=row.published_date,
        score=row.score or NOT_SCORED,
        analysis=row.analysis or "",
        feed_url=row.feed_url or "",
        model=row.model or "",
        reported=bool(row.reported),
        created_at=row.created_at,
    )


def _title_matches(title_glob: str):
    return t.c.title.ilike(glob_to_store_pattern(title_glob), escape=LIKE_ESCAPE)


class ArticleStore:
    """Single-table article persistence.

    Owns deduplication, scoring state and the reported flag. Every bulk
    transition is one UPDATE statement in its own transaction, so an id
    list is applied completely or not at all.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize article store."""
        self.engine = engine

    def exists(self, guid: str) -> bool:
        """Check if an article with the given GUID is stored."""
        query = select(t.c.guid).where(t.c.guid == guid).limit(1)
        with self.engine.connect() as conn:
            return conn.execute(query).first() is not None

    def insert(self, article: Article) -> None:
        """
        Insert a new article.

        Raises:
            ConstraintError: if the GUID is already stored. Callers check
                ``exists`` first; this is not the dedupe mechanism.
        """
        values = {
            "guid": article.guid,
            "title": article.title,
            "link": article.link,
            "description": article.description,
            "content": article.content,
            "published_date": to_utc_naive(article.published_date),
            "score": article.score,
            "analysis": article.analysis,
            "feed_url": article.feed_url,
            "model": article.model,
            "reported": article.reported,
        }
        try:
            with self.engine.begin() as conn:
                conn.execute(insert(t).values(**values))
        except IntegrityError as e:
            raise ConstraintError(f"Article already stored: {article.guid}") from e

    def get(self, guid: str) -> Optional[Article]:
        """Get a single article by GUID."""
        with self.engine.connect() as conn:
            row = conn.execute(select(t).where(t.c.guid == guid)).first()
        return _row_to_article(row) if row is not None else None

    def count(self) -> int:
        """Count stored articles."""
        with self.engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(t)).scalar_one()

    def select_unscored(self, title_glob: Optional[str] = None) -> List[Article]:
        """
        Get articles that need scoring.

        Returns rows never scored (or whose score extraction failed), plus,
        when ``title_glob`` is given, every row whose title matches it so an
        operator can force a rescore.
        """
        condition = or_(t.c.score.is_(None), t.c.score == NOT_SCORED, t.c.score == SCORE_NA)
        if title_glob:
            condition = or_(condition, _title_matches(title_glob))

        query = select(t).where(condition).order_by(t.c.published_date.desc())
        with self.engine.connect() as conn:
            return [_row_to_article(row) for row in conn.execute(query)]

    def update_score(self, guid: str, score: str, analysis: str, model: str) -> None:
        """Overwrite score, analysis and model for one article."""
        stmt = (
            update(t)
            .where(t.c.guid == guid)
            .values(score=score, analysis=analysis, model=model)
        )
        with self.engine.begin() as conn:
            updated = conn.execute(stmt).rowcount
        if updated == 0:
            raise NotFoundError(f"No article with GUID {guid}")

    def select_recent(self, limit: int, reported_only: bool = False) -> List[Article]:
        """Get the most recent articles, newest first."""
        query = select(t)
        if reported_only:
            query = query.where(t.c.reported == true())
        query = query.order_by(t.c.published_date.desc()).limit(limit)

        with self.engine.connect() as conn:
            return [_row_to_article(row) for row in conn.execute(query)]

    def select_since(self, since: datetime, unreported_only: bool = False) -> List[Article]:
        """Get articles published at or after ``since``, newest first."""
        query = select(t).where(t.c.published_date >= to_utc_naive(since))
        if unreported_only:
            query = query.where(or_(t.c.reported == false(), t.c.reported.is_(None)))
        query = query.order_by(t.c.published_date.desc())

        with self.engine.connect() as conn:
            return [_row_to_article(row) for row in conn.execute(query)]

    def _bulk_update(self, guids: Sequence[str], **values) -> int:
        if not guids:
            return 0
        stmt = update(t).where(t.c.guid.in_(list(guids))).values(**values)
        with self.engine.begin() as conn:
            return conn.execute(stmt).rowcount

    def mark_reported(self, guids: Sequence[str]) -> int:
        """Mark articles as included in a digest."""
        return self._bulk_update(guids, reported=True)

    def clear_reported(self, guids: Sequence[str]) -> int:
        """Reset the reported flag for the given articles."""
        return self._bulk_update(guids, reported=False)

    def clear_scores(self, guids: Sequence[str]) -> int:
        """Clear score, analysis and model so the articles are scored again."""
        return self._bulk_update(guids, score=NOT_SCORED, analysis="", model="")

    def clear_reported_by_pattern(self, title_glob: str) -> int:
        """
        Reset the reported flag for reported articles whose title matches.

        Returns:
            Number of articles changed
        """
        stmt = (
            update(t)
            .where(_title_matches(title_glob))
            .where(t.c.reported == true())
            .values(reported=False)
        )
        with self.engine.begin() as conn:
            return conn.execute(stmt).rowcount
