"""Download SPDX license texts."""

import time
from pathlib import Path
from typing import Optional

import httpx

from ulpm.utils.constants import (
    HTTP_CLIENT_TIMEOUT,
    HTTP_MAX_RETRIES,
    HTTP_RETRY_BACKOFF,
    LICENSE_URL_TEMPLATE,
)
from ulpm.utils.debug import Output
from ulpm.utils.exceptions import LicenseDownloadError


def license_url(license_id: str) -> str:
    """URL of the plain-text license in the SPDX license list."""
    return LICENSE_URL_TEMPLATE.format(license_id=license_id)


def fetch_license_text(
    license_id: str,
    client: Optional[httpx.Client] = None,
    max_retries: int = HTTP_MAX_RETRIES,
    backoff: float = HTTP_RETRY_BACKOFF,
    output: Optional[Output] = None,
) -> str:
    """Fetch a license text with retry/backoff.

    Retries on transient errors (network issues, 5xx responses) with
    exponential backoff. Does not retry on 4xx errors (unknown license id).

    Raises:
        LicenseDownloadError: If the text could not be fetched
    """
    output = output or Output()
    url = license_url(license_id)
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=HTTP_CLIENT_TIMEOUT, follow_redirects=True)

    last_error: Optional[str] = None
    status_code: Optional[int] = None
    try:
        for attempt in range(max_retries):
            try:
                response = client.get(url)
            except httpx.HTTPError as e:
                last_error = str(e)
                status_code = None
            else:
                if response.is_success:
                    return response.text
                status_code = response.status_code
                last_error = f"HTTP {status_code}"
                if status_code < 500:
                    break

            if attempt < max_retries - 1:
                delay = backoff * (2**attempt)
                output.debug(
                    "Retrying license download",
                    license=license_id,
                    error=last_error[:50],
                    attempt=attempt + 1,
                    delay=delay,
                )
                time.sleep(delay)
    finally:
        if owns_client:
            client.close()

    raise LicenseDownloadError(
        f"Failed to download license '{license_id}' from {url}: {last_error}",
        status_code=status_code,
    )


def download_license(
    license_id: str,
    dest: Path,
    client: Optional[httpx.Client] = None,
    output: Optional[Output] = None,
    **kwargs,
) -> Path:
    """Download a license text to ``dest``.

    Raises:
        LicenseDownloadError: If the text could not be fetched or written
    """
    text = fetch_license_text(license_id, client=client, output=output, **kwargs)
    try:
        dest.write_text(text)
    except OSError as e:
        raise LicenseDownloadError(f"Failed to write {dest.name}: {e}") from e
    return dest
