"""Release archive download."""

from __future__ import annotations

from http.client import HTTPException
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import DownloadError
from .logging import stage_logger

DEFAULT_URL_TEMPLATE = "https://www.wintun.net/builds/wintun-{version}.zip"

_LOG = stage_logger("fetch")


def build_url(raw_version: str, template: str = DEFAULT_URL_TEMPLATE) -> str:
    """Return the archive URL for a raw (non-normalized) release version."""
    return template.format(version=raw_version)


class Fetcher:
    """Retrieves a release archive with a single HTTP GET."""

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def fetch(self, url: str) -> bytes:
        request = Request(url, method="GET")
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        try:
            with urlopen(request, **kwargs) as response:  # type: ignore[arg-type]
                payload = response.read()
        except HTTPError as exc:
            raise DownloadError(f"downloading {url} failed with status {exc.code}") from exc
        except URLError as exc:
            raise DownloadError(f"downloading {url} failed: {exc.reason}") from exc
        except (HTTPException, OSError) as exc:
            raise DownloadError(f"unable to read response from {url}: {exc}") from exc
        _LOG.debug("received %d bytes", len(payload))
        return payload


__all__ = ["DEFAULT_URL_TEMPLATE", "Fetcher", "build_url"]
