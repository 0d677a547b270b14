"""
Retrieval of the Zig language reference source (`langref.html.in`).

The document is either downloaded for a given version or read from a local
snapshot.
"""
import logging
from pathlib import Path
from typing import Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from zls_gen.config import get_config
from zls_gen.exceptions import DownloadError

logger = logging.getLogger(__name__)


def langref_url(version: str, url_template: Optional[str] = None) -> str:
    """Build the download URL of `langref.html.in` for `version`."""
    template = url_template or get_config().langref_url
    return template.format(version=version)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=30),
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    reraise=True
)
def _http_get(url: str, timeout: int) -> requests.Response:
    try:
        return requests.get(url, timeout=timeout)
    except (requests.ConnectionError, requests.Timeout) as e:
        logger.warning(f"⚠️ Request to {url} failed, retrying: {e}")
        raise


def fetch_langref(version: str, url_template: Optional[str] = None, timeout: Optional[int] = None) -> str:
    """
    Download the language reference source for a Zig version.

    Args:
        version: `master` or a released version such as `0.10.1`.
        url_template: URL template with a `{version}` field; defaults to the configured one.
        timeout: Request timeout in seconds; defaults to the configured one.

    Returns:
        str: The document text.

    Raises:
        DownloadError: If the server answers with a non-200 status or the
            request keeps failing after all retries.
    """
    config = get_config()
    url = langref_url(version, url_template)
    timeout = timeout or config.request_timeout
    http_get = _http_get.retry_with(
        stop=stop_after_attempt(config.max_retries),
        wait=wait_exponential(multiplier=1, min=config.retry_delay, max=30),
    )

    logger.info(f"📥 Downloading {url}")
    try:
        response = http_get(url, timeout)
    except requests.RequestException as e:
        logger.error(f"failed to download {url}: {e}")
        raise DownloadError(f"failed to download {url}: {e}") from e

    if response.status_code != 200:
        reason = response.reason or str(response.status_code)
        logger.error(f"failed to download {url}: {reason}")
        raise DownloadError(f"failed to download {url}: {reason}")

    response.encoding = "utf-8"
    logger.info(f"✅ Downloaded {len(response.content)} bytes")
    return response.text


def read_langref(path: str) -> str:
    """Read a local `langref.html.in` snapshot."""
    logger.info(f"📂 Reading langref from {path}")
    return Path(path).read_text(encoding="utf-8")
