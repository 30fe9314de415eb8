"""Main entry point for the vidprobe command."""

import logging
import sys
from pathlib import Path

import click
from tqdm import tqdm

from .core import (
    BackendKind,
    PlaylistResolver,
    VideoMetadata,
    VidProbeError,
    create_backend,
    download_stream,
)
from .utils import Config, log_error, setup_logging
from .version import __version__

logger = logging.getLogger(__name__)

STREAM_KINDS = {
    "combined": "streams",
    "video": "video_streams",
    "audio": "audio_streams",
}


def print_metadata(video: VideoMetadata):
    """Print the resolved fields of a video."""
    click.echo(f"Id:          {video.video_id}")
    click.echo(f"Title:       {video.title}")
    click.echo(f"Author:      {video.author}")
    click.echo(f"Length:      {video.length}s")
    click.echo(f"Views:       {video.view_count}")
    click.echo(f"Likes:       {video.like_count}")
    click.echo(f"Dislikes:    {video.dislike_count}")
    click.echo(f"Comments:    {video.comment_count}")
    click.echo(f"Published:   {video.published}")
    click.echo(f"Category:    {video.category}")
    click.echo(f"Thumbnail:   {video.thumb_default}")

    for label, attr in STREAM_KINDS.items():
        streams = getattr(video, attr)
        click.echo(f"\n{label} streams ({len(streams)}):")
        for index, stream in enumerate(streams):
            click.echo(f"  [{index}] {stream.extension:<5} {stream.quality:<10} {stream.url}")


@click.group()
@click.version_option(__version__, prog_name="vidprobe")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.option("--config", "config_file", type=click.Path(path_type=Path),
              help="Settings file (default: ~/vidprobe_settings.json).")
@click.pass_context
def cli(ctx, debug, config_file):
    """Inspect YouTube videos and playlists, and download their streams."""
    setup_logging(logging.DEBUG if debug else logging.WARNING)
    ctx.obj = Config(config_file)


def backend_option(f):
    return click.option(
        "--backend", type=click.Choice([k.value for k in BackendKind]), default=None,
        help="Resolution backend (default: from settings).",
    )(f)


@cli.command()
@click.argument("url")
@backend_option
@click.pass_obj
def info(config, url, backend):
    """Print metadata and streams of a video."""
    with create_backend(backend or config.backend, config) as resolver:
        video = resolver.resolve(url)
    print_metadata(video)


@cli.command()
@click.argument("url")
@backend_option
@click.option("--resolve", "resolve_entries", is_flag=True,
              help="Resolve every entry (one extra lookup per video).")
@click.pass_obj
def playlist(config, url, backend, resolve_entries):
    """List the videos of a playlist."""
    with create_backend(backend or config.backend, config) as resolver:
        result = PlaylistResolver(backend=resolver).resolve(url)
        click.echo(f"{result.title} ({len(result)} videos, {len(result.excluded_ids)} private or deleted)")
        for entry in result:
            click.echo(f"  {entry.video_id}  {entry.title}")
            if resolve_entries:
                video = entry.resolve()
                click.echo(f"      {video.view_count} views, {len(video.streams)} streams")


@cli.command()
@click.argument("url")
@backend_option
@click.option("--kind", type=click.Choice(list(STREAM_KINDS)), default="combined",
              show_default=True, help="Which stream list to pick from.")
@click.option("--index", type=int, default=0, show_default=True,
              help="Position in the stream list (see 'vidprobe info').")
@click.option("--output", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Target directory (default: from settings).")
@click.pass_obj
def download(config, url, backend, kind, index, output):
    """Download one stream of a video."""
    with create_backend(backend or config.backend, config) as resolver:
        video = resolver.resolve(url)
    streams = getattr(video, STREAM_KINDS[kind])
    if not 0 <= index < len(streams):
        raise click.BadParameter(f"{kind} has {len(streams)} streams", param_hint="--index")

    with tqdm(total=100, unit="%", desc=video.title[:40]) as bar:
        def on_progress(percent, downloaded, total):
            bar.update(percent - bar.n)

        path = download_stream(streams[index], video.title, output or config.download_path,
                               progress_callback=on_progress)
    click.echo(f"Saved {path}")


def main():
    """Main entry point."""
    try:
        cli(standalone_mode=False)
    except click.exceptions.Abort:
        logger.info("Interrupted by user")
        return 130
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except VidProbeError as e:
        logger.debug(f"Details: {e.details}")
        log_error(f"{type(e).__name__}: {e}", e)
        click.echo(f"Error: {e}", err=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
