"""Orchestration layer for stablecoin tracker.

This module provides the high-level entry points used by the CLI and the
scheduler:
- synchronize(): Refresh market figures in the record store
- discover(): Find provider ids for catalog entries and save a report

Example:
    orchestrator = TrackerOrchestrator(config, providers, store)
    await orchestrator.synchronize(on_progress=print)
    await orchestrator.discover(DEFAULT_CATALOG)
"""

from stablecoin_tracker.orchestration.tracker_orchestrator import TrackerOrchestrator, write_report

__all__ = ["TrackerOrchestrator", "write_report"]
