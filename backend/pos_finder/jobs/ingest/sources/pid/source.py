import logging
from typing import Optional

import httpx

from pos_finder.core.config import Settings
from pos_finder.hours.errors import FeedUnavailable
from pos_finder.jobs.ingest.sources.base import BaseSource

from .http import get_json_with_retry, make_client

logger = logging.getLogger(__name__)


class PidSource(BaseSource):
    """
    Prague Integrated Transport (PID) points of sale feed:
      - GET <POS_FEED_URL> -> JSON list of point-of-sale entries
    """

    name = "pid"

    def __init__(self, cfg: Settings, *, transport: Optional[httpx.BaseTransport] = None):
        self.cfg = cfg
        self.transport = transport

    def fetch(self) -> list[dict]:
        logger.info(
            "Fetching PID feed url=%s timeouts(connect=%.1f read=%.1f) retries=%d",
            self.cfg.feed_url,
            self.cfg.feed_connect_timeout,
            self.cfg.feed_read_timeout,
            self.cfg.feed_retries,
        )

        with make_client(self.cfg, transport=self.transport) as client:
            payload = get_json_with_retry(self.cfg, client, self.cfg.feed_url)

        if not isinstance(payload, list):
            raise FeedUnavailable(f"Unexpected PID feed payload: expected a list, got {type(payload).__name__}")

        logger.info("PID feed returned %d entries", len(payload))
        return payload
