import logging
import random
import time
from typing import Any, Optional

import httpx

from pos_finder.core.config import Settings
from pos_finder.hours.errors import FeedUnavailable

logger = logging.getLogger(__name__)

RETRY_STATUSES = {429, 502, 503, 504}


def log_request(request: httpx.Request) -> None:
    logger.debug("HTTP %s %s", request.method, request.url)


def make_client(cfg: Settings, *, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    timeout = httpx.Timeout(cfg.feed_read_timeout, connect=cfg.feed_connect_timeout)
    return httpx.Client(
        timeout=timeout,
        headers={"Accept": "application/json"},
        follow_redirects=True,
        event_hooks={"request": [log_request]},
        transport=transport,
    )


def sleep_backoff(cfg: Settings, *, attempt: int, url: str) -> None:
    if cfg.feed_backoff_base <= 0:
        return
    sleep_s = cfg.feed_backoff_base * (2 ** (attempt - 1))
    sleep_s += random.uniform(0, 0.5)
    logger.info("Sleeping %.2fs before retrying %s", sleep_s, url)
    time.sleep(sleep_s)


def get_json_with_retry(cfg: Settings, client: httpx.Client, url: str) -> Any:
    last_err: Exception | None = None

    for attempt in range(1, cfg.feed_retries + 1):
        t0 = time.perf_counter()
        try:
            r = client.get(url)
            elapsed = time.perf_counter() - t0

            if r.status_code in RETRY_STATUSES:
                logger.warning(
                    "Retryable HTTP %d (attempt %d/%d) GET %s after %.2fs",
                    r.status_code,
                    attempt,
                    cfg.feed_retries,
                    url,
                    elapsed,
                )
                raise httpx.HTTPStatusError("Retryable status", request=r.request, response=r)

            logger.debug("GET %s completed in %.2fs status=%d", url, elapsed, r.status_code)
            r.raise_for_status()

            try:
                return r.json()
            except ValueError as e:
                raise FeedUnavailable(f"Failed to parse feed JSON from {url}: {e}") from e

        except httpx.TimeoutException as e:
            last_err = e
            logger.warning(
                "%s (attempt %d/%d) GET %s after %.2fs",
                e.__class__.__name__,
                attempt,
                cfg.feed_retries,
                url,
                time.perf_counter() - t0,
            )

        except httpx.HTTPStatusError as e:
            last_err = e
            status = e.response.status_code
            if status not in RETRY_STATUSES:
                logger.error("Non-retryable HTTP %s GET %s", status, url)
                raise FeedUnavailable(f"Failed to retrieve feed from {url}: HTTP {status}") from e

        except httpx.TransportError as e:
            last_err = e
            logger.warning("Request failed (attempt %d/%d) GET %s error=%r", attempt, cfg.feed_retries, url, e)

        if attempt < cfg.feed_retries:
            sleep_backoff(cfg, attempt=attempt, url=url)

    raise FeedUnavailable(f"Failed to retrieve feed from {url} after {cfg.feed_retries} attempts: {last_err!r}")
