"""Scheduler loop."""

from .orchestrator import (
    CycleOptions,
    PipelineOrchestrator,
    PipelineStage,
    PipelineState,
    StageStatus,
)

__all__ = ["CycleOptions", "PipelineOrchestrator", "PipelineStage", "PipelineState", "StageStatus"]
