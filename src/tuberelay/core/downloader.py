"""Progress-tracked downloading through the relay's proxy endpoint."""

import logging
import webbrowser
from pathlib import Path
from typing import Callable, List, Optional
from urllib.parse import quote

import requests

from .errors import DownloadError
from .models import DownloadProgress, is_success

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 64


def build_proxy_url(proxy_endpoint: str, url: str) -> str:
    """Return ``<proxy_endpoint>?url=<percent-encoded url>``."""
    return f"{proxy_endpoint}?url={quote(url, safe='')}"


def compute_percentage(loaded: int, total: int) -> int:
    """Half-up rounded percentage, 0 when *total* is unknown."""
    if total <= 0:
        return 0
    return min(100, int(loaded * 100 / total + 0.5))


class ProxyDownloader:
    """Streams a remote file through the proxy and saves it locally."""

    def __init__(self, url: str, filename: str, download_dir: Path, proxy_endpoint: str,
                 progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.filename = filename
        self.download_dir = Path(download_dir)
        self.proxy_endpoint = proxy_endpoint
        self.progress_callback = progress_callback
        self.session = session or requests.Session()

        self._loaded = 0
        self._total = 0

    @property
    def output_path(self) -> Path:
        return self.download_dir / self.filename

    @property
    def proxy_url(self) -> str:
        return build_proxy_url(self.proxy_endpoint, self.url)

    def start(self) -> Optional[Path]:
        """Download the file.

        Returns the saved path, or None when the proxy could not be reached
        and the original URL was handed to the web browser instead.
        """
        logger.info(f"Starting download: {self.filename}")
        logger.debug(f"Original URL: {self.url}")
        logger.debug(f"Proxy URL: {self.proxy_url}")

        try:
            response = self.session.get(self.proxy_url, stream=True)
        except requests.ConnectionError as e:
            # Some environments block the proxy but still allow direct navigation
            logger.warning(f"Proxy unreachable ({e}), opening {self.filename} in the browser")
            webbrowser.open_new_tab(self.url)
            return None

        with response:
            if not is_success(response.status_code):
                text = response.text
                logger.error(f"Proxy error: {response.status_code} {response.reason}")
                raise DownloadError(response.status_code, response.reason, text)

            content_length = response.headers.get("content-length")
            self._total = int(content_length) if content_length else 0
            logger.info(f"Content-Length: {self._total} bytes")

            chunks = self._read_chunks(response)

        self._save(b"".join(chunks))
        logger.info(f"Successfully downloaded: {self.filename} ({self._loaded} bytes)")
        return self.output_path

    def _read_chunks(self, response: requests.Response) -> List[bytes]:
        chunks: List[bytes] = []
        self._loaded = 0
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if not chunk:
                continue
            chunks.append(chunk)
            self._loaded += len(chunk)
            self._report_progress()
        return chunks

    def _report_progress(self):
        if self.progress_callback:
            self.progress_callback(DownloadProgress(
                loaded=self._loaded,
                total=self._total,
                percentage=compute_percentage(self._loaded, self._total),
            ))

    def _save(self, payload: bytes):
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_path, "wb") as f:
            f.write(payload)
