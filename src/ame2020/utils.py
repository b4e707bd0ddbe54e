"""
Download helpers for ame2020.

Mass tables are fetched from a list of mirrors with per-domain rate limiting
and content validation, so an HTML block page is never saved as data.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable
from urllib.parse import urlparse

import requests

from .config import Config, get_logger

logger = get_logger("utils")

__all__ = [
    "RateLimiter",
    "download_with_mirrors",
]

Validator = Callable[[str], tuple[bool, str]]

_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
                  "AppleWebKit/537.36 (KHTML, like Gecko) "
                  "Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/plain,*/*",
    "Accept-Language": "en-US,en;q=0.9",
}


class RateLimiter:
    """
    Enforce a minimum delay between requests to the same domain.

    Args:
        delay: Seconds between requests. Defaults to ``Config.REQUEST_DELAY``.
    """

    def __init__(self, delay: float | None = None):
        self._delay = Config.REQUEST_DELAY if delay is None else delay
        self._last_request_time: dict[str, float] = {}

    def wait(self, url: str) -> None:
        """Sleep until a request to ``url``'s domain is allowed."""
        domain = urlparse(url).netloc
        if domain in self._last_request_time:
            elapsed = time.time() - self._last_request_time[domain]
            if elapsed < self._delay:
                time.sleep(self._delay - elapsed)

    def record(self, url: str) -> None:
        """Remember that a request to ``url``'s domain was just made."""
        self._last_request_time[urlparse(url).netloc] = time.time()

    def reset(self) -> None:
        self._last_request_time.clear()


_rate_limiter = RateLimiter()


def download_with_mirrors(
    mirrors: list[str],
    output_path: Path,
    validators: list[Validator] | None = None,
    headers: dict[str, str] | None = None,
    data_name: str = "data",
    rate_limiter: RateLimiter | None = None,
) -> Path:
    """
    Download a file from a list of mirror URLs with fallback.

    Args:
        mirrors: List of URLs to try in order.
        output_path: Where to save the downloaded file.
        validators: List of validation functions. Each takes content string
            and returns (is_valid, error_message). All must pass.
        headers: Optional HTTP headers to include in requests.
        data_name: Name of the data for logging (e.g., "AME2020").
        rate_limiter: Limiter to use; defaults to a module-wide one.

    Returns:
        Path to the downloaded file.

    Raises:
        RuntimeError: If download fails from all mirrors.
    """
    if output_path.exists():
        logger.info(f"{data_name} file already exists: {output_path}")
        return output_path

    if headers is None:
        headers = _DEFAULT_HEADERS

    if validators is None:
        validators = [
            lambda c: (len(c) >= 1000, f"File too small ({len(c)} bytes)"),
            lambda c: ("<html" not in c[:500].lower(), "Received HTML instead of data"),
        ]

    limiter = rate_limiter or _rate_limiter
    last_error: Exception | None = None

    for url in mirrors:
        try:
            limiter.wait(url)
            logger.info(f"Trying to download {data_name} from {url}...")
            response = requests.get(url, timeout=Config.DOWNLOAD_TIMEOUT, headers=headers)
            limiter.record(url)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Failed to download from {url}: {e}")
            last_error = e
            continue

        content = response.text
        failures = [msg for is_valid, msg in (v(content) for v in validators) if not is_valid]
        if failures:
            logger.warning(f"Validation failed for {url}: {failures[0]}")
            continue

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content)
        logger.info(f"Saved {data_name} to {output_path} ({len(content):,} bytes)")
        return output_path

    raise RuntimeError(
        f"Could not download {data_name} from any mirror. Last error: {last_error}\n"
        "Please download manually from https://www.anl.gov/phy/atomic-mass-data-resources\n"
        f"and save to {output_path}"
    )
