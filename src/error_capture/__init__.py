"""Error capture pipeline.

Captures failures from every origin (guarded regions, uncaught exceptions,
unawaited asyncio failures, HTTP requests and manual reports) into a
resolvable error ledger and a leveled structured log, both persisted to
durable storage and exportable as versioned JSON.
"""

__version__ = "1.0.0"
