"""Secure download utilities with SSL certificate handling.

This module provides SSL-aware download functions that work correctly
on macOS hosts where the system certificate store is not accessible to
Python by default.
"""

from __future__ import annotations

import os
import shutil
import ssl
import tempfile
from pathlib import Path
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

import certifi

from devsetup import __version__ as DEVSETUP_VERSION
from devsetup.core.errors import DownloadError, InsecureDownloadError
from devsetup.core.logging import get_logger

LOGGER = get_logger(__name__)


def get_ssl_context() -> ssl.SSLContext:
    """Get an SSL context that uses certifi's CA bundle.

    Returns:
        An SSL context configured with certifi's CA certificates.
    """
    return ssl.create_default_context(cafile=certifi.where())


def ensure_https(url: str) -> None:
    """Reject any download location that is not HTTPS.

    Raises:
        InsecureDownloadError: If the URL is not HTTPS.
    """
    if not url.startswith("https://"):
        raise InsecureDownloadError(
            f"Only HTTPS URLs are supported: {url}",
            remediation="fix the download_url in your devsetup configuration",
        )


def secure_urlopen(url: str, timeout: Optional[float] = 30.0):
    """Open a URL with proper SSL certificate verification.

    Args:
        url: The URL to open.
        timeout: Connection timeout in seconds.

    Returns:
        A file-like object for reading the response.

    Raises:
        URLError: If the URL cannot be opened.
        InsecureDownloadError: If the URL is not HTTPS.
    """
    ensure_https(url)
    request = Request(url, headers={"User-Agent": f"devsetup/{DEVSETUP_VERSION}"})
    return urlopen(request, timeout=timeout, context=get_ssl_context())  # nosec B310


def download_to_temp(url: str, timeout: Optional[float] = 60.0, suffix: str = "") -> Path:
    """Download a URL into a fresh temporary file.

    The temporary file is removed again if the download fails, so callers
    only ever see a complete file.

    Args:
        url: The URL to download from.
        timeout: Connection timeout in seconds.
        suffix: Suffix for the temporary file name.

    Returns:
        Path to the downloaded file. The caller owns it.

    Raises:
        DownloadError: If the download fails.
        InsecureDownloadError: If the URL is not HTTPS.
    """
    ensure_https(url)
    fd, temp_name = tempfile.mkstemp(prefix="devsetup-", suffix=suffix)
    os.close(fd)
    temp_path = Path(temp_name)

    try:
        with secure_urlopen(url, timeout=timeout) as response:
            total_size = response.getheader("Content-Length")
            if total_size:
                LOGGER.info(f"Download size: {int(total_size) / 1024 / 1024:.1f} MB")
            with open(temp_path, "wb") as f:
                shutil.copyfileobj(response, f)
    except HTTPError as e:
        temp_path.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: HTTP {e.code} - {e.reason}") from e
    except URLError as e:
        temp_path.unlink(missing_ok=True)
        raise DownloadError(
            f"Failed to download {url}: {e.reason}. Check your network connection."
        ) from e
    except (OSError, ValueError) as e:
        temp_path.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}") from e

    LOGGER.debug(f"Downloaded {url} to {temp_path}")
    return temp_path
