"""Scheduler loop: fetch, score and report, once or on an interval."""

import logging
import threading
import time
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..errors import ConfigError, FeedError
from ..ingestion import FeedIngestor
from ..report import ReportBuilder
from ..scoring import ScoringEngine
from ..web import WebServer

log = logging.getLogger(__name__)
console = Console()


class PipelineState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SCORING = "scoring"
    REPORTING = "reporting"
    SLEEPING = "sleeping"
    DONE = "done"


class CycleOptions(BaseModel):
    """What one cycle does."""

    no_fetch: bool = Field(False, description="Skip fetching")
    no_score: bool = Field(False, description="Skip scoring")
    no_report: bool = Field(False, description="Skip the report")
    age_days: int = Field(7, description="Report window in days")
    threshold: int = Field(50, description="Report score threshold")
    out_path: Optional[str] = Field(None, description="Report output file")
    send_email: bool = Field(False, description="Mail the report")
    include_reported: bool = Field(False, description="Include already reported articles")


class StageStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


_STATUS_MARKUP = {
    StageStatus.PENDING: "[dim]not run[/dim]",
    StageStatus.RUNNING: "[dim]not run[/dim]",
    StageStatus.OK: "[green]ok[/green]",
    StageStatus.FAILED: "[red]failed[/red]",
    StageStatus.SKIPPED: "[dim]-[/dim]",
}


class PipelineStage:
    """One phase of a cycle and what it reported."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.status = StageStatus.PENDING
        self.error: Optional[str] = None
        self.stats: Dict = {}
        self._started: Optional[float] = None
        self._elapsed = 0.0

    @property
    def success(self) -> bool:
        return self.status is StageStatus.OK

    @property
    def skipped(self) -> bool:
        return self.status is StageStatus.SKIPPED

    @property
    def duration(self) -> float:
        return self._elapsed

    def start(self):
        self.status = StageStatus.RUNNING
        self._started = time.monotonic()

    def _finish(self, status: StageStatus):
        if self._started is not None:
            self._elapsed = time.monotonic() - self._started
        self.status = status

    def complete(self, stats: Optional[Dict] = None):
        self.stats.update(stats or {})
        self._finish(StageStatus.OK)

    def skip(self):
        self.status = StageStatus.SKIPPED

    def fail(self, error: str):
        self.error = error
        self._finish(StageStatus.FAILED)

    def details(self) -> str:
        if self.skipped:
            return "skipped"
        if not self.success:
            return escape(self.error or "")
        stats = self.stats
        if self.name == "fetch":
            return f"{stats.get('received', 0)} received, {stats.get('added', 0)} added"
        if self.name == "score":
            return f"{stats.get('scored', 0)}/{stats.get('candidates', 0)} scored"
        if self.name == "report":
            return f"{stats.get('selected', 0)} articles reported"
        return ""


class PipelineOrchestrator:
    """Runs fetch, score and report cycles.

    Components for skipped phases may be None. A feed that cannot be
    fetched only aborts the fetch phase; every other error propagates.
    """

    def __init__(
        self,
        feed_url: str,
        options: CycleOptions,
        ingestor: Optional[FeedIngestor] = None,
        scoring: Optional[ScoringEngine] = None,
        reporter: Optional[ReportBuilder] = None,
        web_server: Optional[WebServer] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.feed_url = feed_url
        self.options = options
        self.ingestor = ingestor
        self.scoring = scoring
        self.reporter = reporter
        self.web_server = web_server
        self.stop_event = stop_event or threading.Event()
        self.state = PipelineState.IDLE
        self.cycles = 0
        self.stages: List[PipelineStage] = []

    def _new_stages(self) -> List[PipelineStage]:
        return [
            PipelineStage("fetch", "Fetching RSS feed"),
            PipelineStage("score", "Scoring unscored articles"),
            PipelineStage("report", "Generating report"),
        ]

    def _require(self, component, name: str):
        if component is None:
            raise ConfigError(f"{name} is not configured for this run")
        return component

    def _fetch(self, stage: PipelineStage) -> None:
        ingestor = self._require(self.ingestor, "Feed ingestion")
        self.state = PipelineState.FETCHING
        stage.start()
        try:
            stats = ingestor.fetch_and_store(self.feed_url)
        except FeedError as e:
            # Feed outages are transient; the rest of the cycle still runs.
            log.error("%s", e)
            stage.fail(str(e))
            return
        stage.complete(stats.model_dump())

    def _score(self, stage: PipelineStage) -> None:
        engine = self._require(self.scoring, "Scoring")
        self.state = PipelineState.SCORING
        stage.start()
        stats = engine.run()
        stage.complete(stats.model_dump())

    def _report(self, stage: PipelineStage) -> None:
        reporter = self._require(self.reporter, "Reporting")
        self.state = PipelineState.REPORTING
        stage.start()
        opts = self.options
        result = reporter.run(
            age_days=opts.age_days,
            threshold=opts.threshold,
            out_path=opts.out_path,
            send_email=opts.send_email,
            include_reported=opts.include_reported,
        )
        stage.complete({"selected": len(result.selected), "emailed": result.emailed})

    def run_cycle(self) -> List[PipelineStage]:
        """Run one fetch, score, report cycle."""
        self.cycles += 1
        self.stages = self._new_stages()
        fetch, score, report = self.stages
        log.info("Starting cycle %d...", self.cycles)

        current = fetch
        try:
            if self.options.no_fetch:
                fetch.skip()
            else:
                self._fetch(fetch)

            current = score
            if self.options.no_score:
                score.skip()
            else:
                self._score(score)

            current = report
            if self.options.no_report:
                report.skip()
            else:
                self._report(report)
        except Exception as e:
            current.fail(str(e))
            raise
        finally:
            self._print_summary()

        return self.stages

    def _print_summary(self) -> None:
        table = Table(title=f"Cycle {self.cycles} Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"
            table.add_row(
                stage.name.title(), _STATUS_MARKUP[stage.status], duration, stage.details()
            )

        console.print(table)

    def stop(self) -> None:
        self.stop_event.set()

    def run(self, interval_seconds: float = 0, serve: bool = False) -> None:
        """
        Run cycles until stopped.

        An interval of 0 runs a single cycle. When serving, the web view keeps
        running after that cycle until the stop event is set.
        """
        if serve:
            if self.web_server is None:
                raise ConfigError("Web server is not configured for this run")
            self.web_server.start_background()

        console.print("Starting ai-rss-scraper...")
        try:
            while True:
                self.run_cycle()

                if interval_seconds <= 0:
                    if serve:
                        self.state = PipelineState.SLEEPING
                        self.stop_event.wait()
                    break

                self.state = PipelineState.SLEEPING
                log.info("Sleeping for %ss...", interval_seconds)
                if self.stop_event.wait(interval_seconds):
                    break
        finally:
            self.state = PipelineState.DONE
            if serve and self.web_server is not None:
                self.web_server.shutdown()

        log.info("ai-rss-scraper finished")
