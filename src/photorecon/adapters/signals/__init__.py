"""JSON signal batches: validation and translation into domain signals."""

from __future__ import annotations

from .schema import SignalBatch, SignalBatchInput
from .translator import parse_signals

__all__ = ["SignalBatch", "SignalBatchInput", "parse_signals"]
