"""Recursive crawler, concurrency limiter and error channel."""

from tfx.core.crawl.channel import ErrorReceiver, ErrorSender, error_channel
from tfx.core.crawl.crawler import (
    DEFAULT_EXTENSIONS,
    CrawlContext,
    EntryKind,
    ValidationReport,
    crawl,
    dispatch_validation,
    run_crawl,
    validate_tree,
)
from tfx.core.crawl.limiter import ConcurrencyLimiter
from tfx.core.crawl.reporting import NullReporter, ProgressReporter

__all__ = [
    "DEFAULT_EXTENSIONS",
    "ConcurrencyLimiter",
    "CrawlContext",
    "EntryKind",
    "ErrorReceiver",
    "ErrorSender",
    "NullReporter",
    "ProgressReporter",
    "ValidationReport",
    "crawl",
    "dispatch_validation",
    "error_channel",
    "run_crawl",
    "validate_tree",
]
