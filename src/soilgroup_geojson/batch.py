"""Sequential batch conversion of several archives."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from .config import ConversionConfig
from .models import BatchOutcome, BatchSource
from .pipeline import convert

logger = logging.getLogger(__name__)


def run_batch(
    sources: Sequence[BatchSource],
    config: ConversionConfig | None = None,
    *,
    client: httpx.Client | None = None,
) -> list[BatchOutcome]:
    """Convert each source in order; a failed item is recorded and the batch continues."""
    config = config or ConversionConfig()
    logger.info("start convert %d files", len(sources))

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=config.timeout)

    outcomes: list[BatchOutcome] = []
    try:
        for i, source in enumerate(sources, start=1):
            outcome = BatchOutcome(url=source.url, output_path=source.output_path)
            logger.info("[%d/%d] %s", i, len(sources), source.url)
            try:
                convert(source.url, source.output_path, config, client=client)
            except Exception as exc:
                outcome.mark_failed(str(exc))
                logger.error("failed: %s", exc)
            else:
                outcome.mark_success()
                logger.info("success")
            outcomes.append(outcome)
    finally:
        if owns_client:
            client.close()

    succeeded = sum(1 for o in outcomes if o.status == "success")
    logger.info("=== summary ===")
    logger.info("success: %d", succeeded)
    logger.info("failed: %d", len(outcomes) - succeeded)
    return outcomes
