"""
Board Pipeline (In-Process Runtime Wiring)

This module provides a deterministic, testable, in-process pipeline runner
that composes the commit phase, the claim phase and the self-check.

Public API:
- BoardPipeline: Main pipeline runner class
- PipelineConfig: Configuration for pipeline execution
- CommitResult: Output of the commit phase
- RunResult: Complete result of a commit + claim run
- create_pipeline: Factory with common configuration
"""

from orchestrator.pipeline import (
    BoardPipeline,
    CommitResult,
    PipelineConfig,
    RunResult,
    create_pipeline,
)


__all__ = [
    "BoardPipeline",
    "PipelineConfig",
    "CommitResult",
    "RunResult",
    "create_pipeline",
]
