"""Resolve YouTube video metadata, streams and playlists."""

from .version import __version__

__all__ = ["__version__"]
