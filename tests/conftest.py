"""Pytest configuration for youtube_subtitles tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from youtube_subtitles.config.loader import clear_config_cache
from youtube_subtitles.tools.base import ToolResult

_CONFIG_ENV_VARS = [
    "YT_SUBS_ROOT",
    "YT_SUBS_TIMEOUT_MS",
    "YT_SUBS_LANGUAGES",
    "YT_SUBS_STRICT_LANGUAGE",
    "YT_SUBS_USE_COOKIES",
    "YT_SUBS_COOKIES_URL",
    "COOKIES_URL",
    "HOST",
    "PORT",
    "PHONE_NUMBER",
]

SAMPLE_VTT = """WEBVTT
Kind: captions
Language: en

00:00:01.000 --> 00:00:03.500
Hello <c>world</c>

00:00:03.500 --> 00:00:06.000
second line
"""


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against the real yt-dlp binary (requires network)",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip = pytest.mark.skip(reason="needs --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config and env vars out of every test."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    root = tmp_path / "yt-subs-root"
    monkeypatch.setenv("YT_SUBS_ROOT", str(root))
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    yield root
    clear_config_cache()


class FakeDownloader:
    """Stands in for YtDlpTool.

    ``files`` maps a language to ``(extension, content)``; languages in
    ``failures`` return the given ToolResult instead.
    """

    def __init__(
        self,
        files: dict[str, tuple[str, str]] | None = None,
        failures: dict[str, ToolResult] | None = None,
        available: bool = True,
    ):
        self.files = files or {}
        self.failures = failures or {}
        self.available = available
        self.calls: list[dict] = []
        self.version_checks = 0

    def is_available(self) -> bool:
        self.version_checks += 1
        return self.available

    def download_subtitles(self, video_id, lang, output_dir, timeout, cookies_path=None):
        self.calls.append(
            {
                "video_id": video_id,
                "lang": lang,
                "output_dir": Path(output_dir),
                "timeout": timeout,
                "cookies_path": cookies_path,
            }
        )
        if lang in self.failures:
            return self.failures[lang]
        if lang in self.files:
            ext, content = self.files[lang]
            (Path(output_dir) / f"{video_id}-{lang}.{lang}.{ext}").write_text(content)
        return ToolResult.ok()

    @property
    def languages_tried(self) -> list[str]:
        return [c["lang"] for c in self.calls]


@pytest.fixture
def fake_downloader():
    return FakeDownloader


@pytest.fixture
def sample_vtt():
    return SAMPLE_VTT
