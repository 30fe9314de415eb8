"""Playlist listing with lazily resolved entries."""

import logging
from typing import Optional

from .backends import VideoBackend
from .errors import SchemaMismatch
from .models import Playlist, PlaylistEntry
from .urls import extract_video_id, watch_url
from .youtube_client import YouTubeClient, YtDlpBackend

logger = logging.getLogger(__name__)

EXCLUDED_TITLES = ("[Private video]", "[Deleted video]")


class PlaylistResolver:
    """Lists the members of a playlist with a single flat extraction.

    Entries are returned unresolved; each one carries ``backend`` and is
    resolved only when ``PlaylistEntry.resolve()`` is called.
    """

    def __init__(self, client: Optional[YouTubeClient] = None,
                 backend: Optional[VideoBackend] = None):
        self.client = client or YouTubeClient()
        self.backend = backend or YtDlpBackend(self.client)

    def resolve(self, url: str) -> Playlist:
        info = self.client.extract(url, flat=True)

        if info.get("_type") != "playlist":
            raise SchemaMismatch(
                f"Expected a playlist document, got _type={info.get('_type')!r}",
                details={"url": url, "_type": info.get("_type")},
            )

        entries = []
        excluded = []
        for item in info.get("entries") or []:
            if not item:
                continue
            if "title" not in item or "url" not in item:
                raise SchemaMismatch(
                    "Playlist entry has no 'title' or 'url' field",
                    details={"url": url, "entry": item},
                )

            video_id = item.get("id") or extract_video_id(item["url"])
            if item["title"] in EXCLUDED_TITLES:
                excluded.append(video_id)
                continue

            entries.append(PlaylistEntry(
                video_id=video_id,
                url=watch_url(video_id),
                title=item["title"],
                backend=self.backend,
            ))

        logger.info(f"Playlist {url}: {len(entries)} videos, {len(excluded)} private or deleted")
        return Playlist(
            title=info.get("title") or "",
            url=url,
            entries=tuple(entries),
            excluded_ids=frozenset(excluded),
        )
