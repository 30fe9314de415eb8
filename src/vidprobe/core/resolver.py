"""Video resolution through the get_video_info endpoint and the YouTube Data API."""

import logging
import concurrent.futures
from typing import Optional
from urllib.parse import urlencode

from .backends import VideoBackend
from .documents import parse_json, parse_query
from .errors import ConfigError
from .metadata import assemble
from .models import VideoMetadata
from .transport import DEFAULT_TIMEOUT, HttpTransport
from .urls import extract_video_id

logger = logging.getLogger(__name__)

INFO_URL = "https://youtube.com/get_video_info"
DATA_API_URL = "https://www.googleapis.com/youtube/v3/videos"


class VideoResolver(VideoBackend):
    """Resolves videos from the info endpoint plus the Data API.

    The two requests are independent and are issued concurrently unless
    ``parallel`` is False. Either one failing aborts the resolution.
    A transport created here is closed by ``close()``.
    """

    def __init__(self, api_key: str, transport: Optional[HttpTransport] = None,
                 parallel: bool = True, timeout: float = DEFAULT_TIMEOUT):
        if not api_key:
            raise ConfigError(
                "A YouTube Data API key is required. Set VIDPROBE_API_KEY "
                "or 'api_key' in the settings file."
            )
        self.api_key = api_key
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(timeout=timeout)
        self.parallel = parallel

    def close(self):
        if self._owns_transport:
            self.transport.close()

    def info_url(self, video_id: str) -> str:
        return f"{INFO_URL}?{urlencode({'video_id': video_id})}"

    def api_url(self, video_id: str) -> str:
        query = urlencode({'id': video_id, 'part': 'snippet,statistics', 'key': self.api_key})
        return f"{DATA_API_URL}?{query}"

    def _fetch(self, video_id: str):
        info_url = self.info_url(video_id)
        api_url = self.api_url(video_id)

        if not self.parallel:
            return self.transport.get_text(info_url), self.transport.get_text(api_url)

        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
            info_future = executor.submit(self.transport.get_text, info_url)
            api_future = executor.submit(self.transport.get_text, api_url)
            # result() re-raises NetworkRequestFailed from the worker
            return info_future.result(), api_future.result()

    def resolve(self, url: str) -> VideoMetadata:
        video_id = extract_video_id(url)
        logger.info(f"Resolving video {video_id}")

        info_body, api_body = self._fetch(video_id)
        basic = parse_query(info_body)
        stats = parse_json(api_body)

        metadata = assemble(video_id, basic, stats)
        logger.debug(
            f"Resolved {video_id}: {len(metadata.streams)} combined, "
            f"{len(metadata.video_streams)} video-only, {len(metadata.audio_streams)} audio-only"
        )
        return metadata
