"""Stream downloading with progress reporting."""

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from .errors import DownloadCancelled, VideoUnavailable
from .models import StreamDescriptor
from .transport import HttpTransport
from ..utils.paths import safe_filename

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, int, int], None]

CHUNK_SIZE = 128 * 1024
# Unranged requests for stream urls are throttled upstream.
RANGE_HEADERS = {'Range': 'bytes=0-'}


class StreamDownloader:
    """Copies a stream to a local file, reporting (percent, downloaded, total)."""

    def __init__(self, stream: StreamDescriptor, output_path: Path,
                 transport: Optional[HttpTransport] = None,
                 progress_callback: Optional[ProgressCallback] = None):
        self.stream = stream
        self.output_path = Path(output_path)
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport()
        self.progress_callback = progress_callback

        self._stop_event = threading.Event()
        self._downloaded_bytes = 0
        self._total_bytes = 0

    def start(self) -> Path:
        """Download the stream. Blocks until done or until ``stop()`` is called.

        A stopped download removes the partly written file and raises
        DownloadCancelled, so a returned path is always a complete file.
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._copy()
        finally:
            if self._owns_transport:
                self.transport.close()

        if self._stop_event.is_set():
            logger.info(f"Download of {self.output_path} stopped")
            self.output_path.unlink(missing_ok=True)
            raise DownloadCancelled(
                f"Download stopped after {self._downloaded_bytes} of {self._total_bytes} bytes",
                details={"url": self.stream.url, "path": str(self.output_path)},
            )

        if self._downloaded_bytes < self._total_bytes:
            raise VideoUnavailable(
                f"Download incomplete: Expected {self._total_bytes}, got {self._downloaded_bytes}",
                details={"url": self.stream.url, "path": str(self.output_path)},
            )
        return self.output_path

    def _copy(self):
        with self.transport.get(self.stream.url, headers=RANGE_HEADERS, stream=True) as r:
            content_length = r.headers.get('content-length')
            if not content_length or not content_length.isdigit():
                logger.warning(f"No Content-Length for {self.stream.url}")
                raise VideoUnavailable(
                    "Stream declares no content length",
                    details={"url": self.stream.url, "content_length": content_length},
                )
            self._total_bytes = int(content_length)
            logger.info(f"Downloading {self._total_bytes} bytes to {self.output_path}")

            with open(self.output_path, 'wb') as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if self._stop_event.is_set():
                        return
                    if chunk:
                        f.write(chunk)
                        self._downloaded_bytes += len(chunk)
                        self._report_progress(self._downloaded_bytes)

    def _report_progress(self, current: int):
        if self.progress_callback and self._total_bytes > 0:
            percent = (current / self._total_bytes) * 100
            self.progress_callback(percent, current, self._total_bytes)

    def stop(self):
        """Stop the download."""
        self._stop_event.set()

    @property
    def downloaded_bytes(self) -> int:
        return self._downloaded_bytes

    @property
    def total_bytes(self) -> int:
        return self._total_bytes


def download_stream(stream: StreamDescriptor, title: str, directory: Path = Path("."),
                    transport: Optional[HttpTransport] = None,
                    progress_callback: Optional[ProgressCallback] = None) -> Path:
    """Download ``stream`` to ``<directory>/<title>.<extension>``."""
    output_path = Path(directory) / f"{safe_filename(title)}.{stream.extension}"
    return StreamDownloader(stream, output_path, transport, progress_callback).start()
