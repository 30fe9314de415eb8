"""Classification of raw format entries into combined, video-only and audio-only streams."""

import logging
from typing import Any, Dict, List, Mapping, Tuple

from .documents import parse_query
from .errors import ParseFailure, SchemaMismatch
from .models import StreamDescriptor

logger = logging.getLogger(__name__)

StreamLists = Tuple[List[StreamDescriptor], List[StreamDescriptor], List[StreamDescriptor]]

# Marker yt-dlp uses for a codec that is not present in a format.
NO_CODEC = "none"


def _require(entry: Mapping[str, str], key: str, source: str) -> str:
    if key not in entry:
        raise ParseFailure(
            f"Format entry in '{source}' has no '{key}' field",
            details={"field": key, "source": source},
        )
    return entry[key]


def extension_from_mime(mime_type: str) -> str:
    """'video/mp4; codecs="avc1.42001E"' -> 'mp4'"""
    if "/" not in mime_type:
        raise ParseFailure(
            f"Malformed MIME type: {mime_type!r}",
            details={"field": "type", "value": mime_type},
        )
    return mime_type.split("/", 1)[1].split(";", 1)[0].strip()


def _split_format_map(value: str) -> List[Dict[str, str]]:
    if not value:
        return []
    return [parse_query(part) for part in value.split(",")]


def classify_info_formats(basic: Mapping[str, str]) -> StreamLists:
    """Split the formats of a ``get_video_info`` document.

    Every entry of ``url_encoded_fmt_stream_map`` is a combined stream. The
    entries of ``adaptive_fmts`` (when present) are video-only if they carry a
    ``quality_label`` and audio-only otherwise; audio in an mp4 container is
    reported as m4a.

    A malformed entry aborts the whole classification, since callers index
    into these lists by position.
    """
    if "url_encoded_fmt_stream_map" not in basic:
        raise ParseFailure(
            "Info document has no 'url_encoded_fmt_stream_map' field",
            details={"field": "url_encoded_fmt_stream_map"},
        )

    combined = []
    for entry in _split_format_map(basic["url_encoded_fmt_stream_map"]):
        source = "url_encoded_fmt_stream_map"
        combined.append(StreamDescriptor(
            extension=extension_from_mime(_require(entry, "type", source)),
            quality=_require(entry, "quality", source),
            url=_require(entry, "url", source),
        ))

    video_only = []
    audio_only = []
    for entry in _split_format_map(basic.get("adaptive_fmts", "")):
        source = "adaptive_fmts"
        extension = extension_from_mime(_require(entry, "type", source))
        url = _require(entry, "url", source)

        if "quality_label" in entry:
            video_only.append(StreamDescriptor(
                extension=extension,
                quality=entry["quality_label"],
                url=url,
            ))
        else:
            audio_only.append(StreamDescriptor(
                extension="m4a" if extension == "mp4" else extension,
                quality=_require(entry, "bitrate", source),
                url=url,
            ))

    logger.debug(
        f"Classified {len(combined)} combined, {len(video_only)} video-only, "
        f"{len(audio_only)} audio-only streams"
    )
    return combined, video_only, audio_only


def _format_field(fmt: Mapping[str, Any], key: str) -> Any:
    if key not in fmt or fmt[key] is None:
        raise SchemaMismatch(
            f"Format {fmt.get('format_id', '?')} has no '{key}' field",
            details={"field": key, "format_id": fmt.get("format_id")},
        )
    return fmt[key]


def _bitrate(fmt: Mapping[str, Any]) -> str:
    abr = fmt.get("abr")
    if abr is None:
        return "0"
    try:
        return str(int(abr))
    except (TypeError, ValueError) as e:
        raise SchemaMismatch(
            f"Format {fmt.get('format_id', '?')} has a non-numeric 'abr': {abr!r}",
            details={"field": "abr", "value": abr, "original_error": e},
        ) from e


def classify_extracted_formats(formats: List[Mapping[str, Any]]) -> StreamLists:
    """Split the ``formats`` list of a yt-dlp info document.

    Returns ``(all_streams, video_only, audio_only)``. A format that carries
    both codecs appears only in the full list. Formats with neither codec
    (storyboards) are skipped.
    """
    all_streams = []
    video_only = []
    audio_only = []

    for fmt in formats:
        vcodec = _format_field(fmt, "vcodec")
        acodec = _format_field(fmt, "acodec")
        has_video = vcodec != NO_CODEC
        has_audio = acodec != NO_CODEC

        if not has_video and not has_audio:
            continue

        quality = fmt.get("format_note") if has_video else None
        stream = StreamDescriptor(
            extension=_format_field(fmt, "ext"),
            quality=quality or _bitrate(fmt),
            url=_format_field(fmt, "url"),
        )

        all_streams.append(stream)
        if has_audio and not has_video:
            audio_only.append(stream)
        elif has_video and not has_audio:
            video_only.append(stream)

    logger.debug(
        f"Classified {len(all_streams)} streams, {len(video_only)} video-only, "
        f"{len(audio_only)} audio-only"
    )
    return all_streams, video_only, audio_only
