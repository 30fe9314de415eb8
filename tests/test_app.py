"""Tests for the vidprobe command"""

import sys
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from conftest import VIDEO_ID
from vidprobe.app import cli, main
from vidprobe.core.errors import VideoNotFound
from vidprobe.core.models import Playlist, PlaylistEntry
from vidprobe.core.youtube_client import build_metadata


def attach_backend(mock_create, video=None, error=None):
    """Make the patched create_backend hand out one backend, also from `with`."""
    backend = MagicMock()
    if error is not None:
        backend.resolve.side_effect = error
    else:
        backend.resolve.return_value = video
    mock_create.return_value.__enter__.return_value = backend
    mock_create.return_value.__exit__.return_value = False
    return backend


class TestCli:
    """Test command output with mocked backends"""

    @patch('vidprobe.app.create_backend')
    def test_info(self, mock_create, temp_dir, ytdlp_info):
        attach_backend(mock_create, build_metadata(VIDEO_ID, ytdlp_info))

        result = CliRunner().invoke(cli, ["--config", str(temp_dir / "s.json"),
                                          "info", VIDEO_ID, "--backend", "ytdlp"])

        assert result.exit_code == 0, result.output
        assert "Title:       Test Video" in result.output
        assert "audio streams (1):" in result.output
        assert mock_create.call_args[0][0] == "ytdlp"
        mock_create.return_value.__exit__.assert_called_once()

    @patch('vidprobe.app.PlaylistResolver')
    @patch('vidprobe.app.create_backend')
    def test_playlist(self, mock_create, mock_resolver, temp_dir):
        backend = attach_backend(mock_create)
        entry = PlaylistEntry("AAAAAAAAAAA", "https://www.youtube.com/watch?v=AAAAAAAAAAA", "First")
        mock_resolver.return_value.resolve.return_value = Playlist(
            "Mix", "https://www.youtube.com/playlist?list=PL1", (entry,), frozenset({"PPPPPPPPPPP"}))

        result = CliRunner().invoke(cli, ["--config", str(temp_dir / "s.json"),
                                          "playlist", "https://www.youtube.com/playlist?list=PL1"])

        assert result.exit_code == 0, result.output
        assert "Mix (1 videos, 1 private or deleted)" in result.output
        assert "AAAAAAAAAAA  First" in result.output
        mock_resolver.assert_called_once_with(backend=backend)

    @patch('vidprobe.app.PlaylistResolver')
    @patch('vidprobe.app.create_backend')
    def test_playlist_resolve_uses_selected_backend(self, mock_create, mock_resolver,
                                                    temp_dir, ytdlp_info):
        backend = attach_backend(mock_create, build_metadata(VIDEO_ID, ytdlp_info))
        entry = PlaylistEntry(VIDEO_ID, f"https://www.youtube.com/watch?v={VIDEO_ID}", "First",
                              backend=backend)
        mock_resolver.return_value.resolve.return_value = Playlist(
            "Mix", "https://www.youtube.com/playlist?list=PL1", (entry,))

        result = CliRunner().invoke(cli, ["--config", str(temp_dir / "s.json"), "playlist",
                                          "https://www.youtube.com/playlist?list=PL1",
                                          "--backend", "internal", "--resolve"])

        assert result.exit_code == 0, result.output
        assert mock_create.call_args[0][0] == "internal"
        backend.resolve.assert_called_once_with(f"https://www.youtube.com/watch?v={VIDEO_ID}")
        assert "1500 views, 3 streams" in result.output

    @patch('vidprobe.app.download_stream')
    @patch('vidprobe.app.create_backend')
    def test_download(self, mock_create, mock_download, temp_dir, ytdlp_info):
        video = build_metadata(VIDEO_ID, ytdlp_info)
        attach_backend(mock_create, video)
        mock_download.return_value = temp_dir / "Test Video.m4a"

        result = CliRunner().invoke(cli, ["--config", str(temp_dir / "s.json"), "download", VIDEO_ID,
                                          "--backend", "ytdlp", "--kind", "audio",
                                          "--output", str(temp_dir)])

        assert result.exit_code == 0, result.output
        args, kwargs = mock_download.call_args
        assert args[0] == video.audio_streams[0]
        assert args[2] == temp_dir

    @patch('vidprobe.app.create_backend')
    def test_download_bad_index(self, mock_create, temp_dir, ytdlp_info):
        attach_backend(mock_create, build_metadata(VIDEO_ID, ytdlp_info))
        result = CliRunner().invoke(cli, ["--config", str(temp_dir / "s.json"), "download", VIDEO_ID,
                                          "--backend", "ytdlp", "--index", "9"])
        assert result.exit_code != 0


@patch('vidprobe.app.log_error')
@patch('vidprobe.app.create_backend')
def test_main_reports_errors(mock_create, mock_log_error, temp_dir, monkeypatch, capsys):
    attach_backend(mock_create, error=VideoNotFound("Video not found: bogus"))
    monkeypatch.setattr(sys, "argv", ["vidprobe", "--config", str(temp_dir / "s.json"),
                                      "info", "bogus", "--backend", "ytdlp"])

    assert main() == 1
    assert "Error: Video not found: bogus" in capsys.readouterr().err
    mock_log_error.assert_called_once()
