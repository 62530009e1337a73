"""
Network download of release archives with progress tracking.

This module provides:
- HTTP/HTTPS downloads with TLS verification (via requests)
- Streaming writes to a temporary sibling, renamed into place on success
- Progress reporting (bytes, percentage, speed, ETA)
- Timeout handling

Downloads are attempted exactly once. A 404 from the release host is
reported as AssetNotPublishedError so callers can tell a missing asset
apart from a broken network.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import requests
from requests.exceptions import RequestException

from wasmtoolkit.core.exceptions import AssetNotPublishedError, DownloadError

logger = logging.getLogger(__name__)


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


def download_file(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    timeout: int = 30,
) -> Path:
    """
    Download file from URL to destination.

    The body is streamed into ``<destination>.part`` and renamed over
    ``destination`` only once it is complete, so an interrupted download never
    leaves a truncated file at ``destination``.

    Args:
        url: URL to download from
        destination: Local path to save file
        progress_callback: Optional callback for progress updates
        timeout: Request timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        AssetNotPublishedError: If the server answers 404
        DownloadError: If the request or transfer fails
        ValueError: If URL or destination is invalid

    Example:
        >>> url = "https://github.com/WebAssembly/binaryen/releases/download/version_78/binaryen-version_78-x86_64-linux.tar.gz"
        >>> download_file(url, Path("downloads/binaryen.tar.gz"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial = destination.with_name(destination.name + ".part")

    logger.info(f"Downloading from {url}")

    try:
        response = requests.get(url, stream=True, timeout=timeout, allow_redirects=True)
    except RequestException as e:
        raise DownloadError(f"Failed to download {url}: {e}") from e

    with response:
        if response.status_code == 404:
            raise AssetNotPublishedError(url)
        if not response.ok:
            raise DownloadError(
                f"Failed to download {url}: HTTP {response.status_code}"
            )

        try:
            _stream_to_file(response, partial, progress_callback)
        except (RequestException, OSError) as e:
            partial.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {url}: {e}") from e

    partial.replace(destination)
    logger.debug(f"Download complete: {destination}")
    return destination


def _stream_to_file(
    response: requests.Response,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
) -> None:
    """Write a streaming response body to disk."""
    content_length = response.headers.get("content-length")
    total_size = int(content_length) if content_length else 0

    downloaded = 0
    start_time = time.time()
    last_progress_time = start_time

    with open(destination, "wb") as f:
        for chunk in response.iter_content(chunk_size=8192):
            if not chunk:
                continue
            f.write(chunk)
            downloaded += len(chunk)

            # Report at most twice per second
            current_time = time.time()
            if progress_callback and (
                current_time - last_progress_time >= 0.5 or downloaded == total_size
            ):
                elapsed = current_time - start_time
                speed = downloaded / elapsed if elapsed > 0 else 0
                remaining = total_size - downloaded if total_size > 0 else 0
                progress_callback(
                    DownloadProgress(
                        bytes_downloaded=downloaded,
                        total_bytes=total_size if total_size > 0 else downloaded,
                        percentage=(downloaded / total_size * 100)
                        if total_size > 0
                        else 0,
                        speed_bps=speed,
                        eta_seconds=remaining / speed if speed > 0 else 0,
                    )
                )
                last_progress_time = current_time


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"
