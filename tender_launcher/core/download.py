"""
Release artifact download.

Fetches a single release asset over HTTPS and streams it to disk:
- Identifying User-Agent and 'Accept: application/octet-stream' headers
- Redirects followed (GitHub release assets redirect to a CDN)
- Non-2xx status and empty bodies are hard failures
- Body streamed in chunks, never buffered in memory
- Partial files removed on failure

There is deliberately a single attempt and no checksum verification;
the resolver falls back to an existing cached binary instead.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import requests
from requests.exceptions import RequestException

from tender_launcher.core.config import get_package_version
from tender_launcher.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
USER_AGENT = f"tender-launcher/{get_package_version()}"


def temp_path_for(destination: Path, pid: Optional[int] = None) -> Path:
    """
    Get the in-flight download path for a final destination.

    The process id is embedded so concurrent launchers never write
    the same temporary file.

    Example:
        >>> temp_path_for(Path("/c/tender"), pid=42)
        PosixPath('/c/tender.tmp-42')
    """
    destination = Path(destination)
    if pid is None:
        pid = os.getpid()
    return destination.with_name(f"{destination.name}.tmp-{pid}")


def open_artifact(url: str, timeout: float = 60) -> requests.Response:
    """
    Issue the GET request for a release artifact.

    Args:
        url: Artifact URL
        timeout: Connect/read timeout in seconds

    Returns:
        Streaming response with a 2xx status

    Raises:
        DownloadError: On transport failure or non-success status
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/octet-stream",
    }

    logger.debug(f"GET {url}")

    try:
        response = requests.get(
            url, headers=headers, stream=True, timeout=timeout, allow_redirects=True
        )
    except RequestException as e:
        raise DownloadError(f"request failed: {e}") from e

    if not 200 <= response.status_code < 300:
        response.close()
        raise DownloadError(
            f"HTTP {response.status_code} {response.reason}",
            status_code=response.status_code,
            reason=response.reason,
        )

    if response.headers.get("content-length") == "0":
        response.close()
        raise DownloadError("empty response body", status_code=response.status_code)

    return response


def save_stream(response: requests.Response, destination: Path) -> int:
    """
    Stream a response body to a file.

    Args:
        response: Response from open_artifact()
        destination: File to write (overwritten if present)

    Returns:
        Number of bytes written

    Raises:
        DownloadError: On read/write failure or if the body was empty.
            The partially written file is removed before raising.
    """
    destination = Path(destination)
    written = 0

    try:
        with response, open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
                    written += len(chunk)
        if written == 0:
            raise DownloadError("empty response body")
    except DownloadError:
        remove_quietly(destination)
        raise
    except (RequestException, OSError) as e:
        logger.debug(f"Error during download to {destination}: {e}")
        remove_quietly(destination)
        raise DownloadError(f"failed writing {destination.name}: {e}") from e

    return written


def download_file(url: str, destination: Path, timeout: float = 60) -> Path:
    """
    Download a release artifact to destination.

    Args:
        url: Artifact URL
        destination: Local path to write (normally a temp_path_for() path)
        timeout: Request timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If the download fails for any reason

    Example:
        >>> from tender_launcher.core.download import download_file, temp_path_for
        >>> final = Path("cache/tender")
        >>> download_file("https://example.com/tender_1.2.3_linux_amd64", temp_path_for(final))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    response = open_artifact(url, timeout=timeout)
    size = save_stream(response, destination)

    logger.debug(f"Downloaded {size} bytes to {destination}")
    return Path(destination)


def remove_quietly(path: Path) -> None:
    """Delete a file if present, logging rather than raising on failure."""
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        logger.debug(f"Could not remove partial download {path}: {e}")


__all__ = [
    "download_file",
    "open_artifact",
    "remove_quietly",
    "save_stream",
    "temp_path_for",
    "USER_AGENT",
]
