"""
RetrievalRequest dataclass describing one subtitle lookup.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from youtube_subtitles.config.defaults import DEFAULT_LANGUAGES, DOWNLOAD_TIMEOUT_MS
from youtube_subtitles.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class RetrievalRequest:
    """Parameters for a single retrieval.

    Attributes:
        video_id: Opaque platform video identifier
        language_candidates: Language codes to try, in priority order
        timeout_ms: Per-attempt yt-dlp timeout in milliseconds
        use_cookies: Whether to provision a cookie file before downloading
        cookies_source: URL or local path of a Netscape cookie file
    """

    video_id: str
    language_candidates: tuple[str, ...] = tuple(DEFAULT_LANGUAGES)
    timeout_ms: int = DOWNLOAD_TIMEOUT_MS
    use_cookies: bool = False
    cookies_source: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.video_id, str) or not self.video_id.strip():
            raise InvalidArgumentError(
                "Video ID is required and must be a string",
                video_id=self.video_id if isinstance(self.video_id, str) else None,
            )
        if not self.language_candidates:
            raise InvalidArgumentError(
                "At least one language candidate is required",
                video_id=self.video_id,
            )
        for lang in self.language_candidates:
            if not isinstance(lang, str) or not lang.strip():
                raise InvalidArgumentError(
                    "Language code must be a non-empty string",
                    video_id=self.video_id,
                    language_code=lang if isinstance(lang, str) else None,
                )
        if self.timeout_ms <= 0:
            raise InvalidArgumentError(
                f"Timeout must be positive, got {self.timeout_ms}",
                video_id=self.video_id,
            )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def build(
        cls,
        video_id: str,
        lang: str | Sequence[str] | None = None,
        *,
        timeout_ms: int | None = None,
        use_cookies: bool | None = None,
        cookies_source: str | None = None,
        fallback_languages: Sequence[str] | None = None,
        strict_language: bool | None = None,
    ) -> RetrievalRequest:
        """Build a request from caller parameters plus configured defaults.

        ``lang`` may be a single code, an explicit candidate list, or None.
        A single code is tried first, followed by the fallback languages
        unless ``strict_language`` is set. Anything left as None is read
        from the resolved config.
        """
        from youtube_subtitles.config.loader import get_config

        config = get_config()
        fallbacks = list(
            fallback_languages if fallback_languages is not None else config.languages
        )
        strict = config.strict_language if strict_language is None else strict_language

        if lang is None or lang == "":
            candidates = fallbacks
        elif isinstance(lang, str):
            candidates = [lang.strip()] if strict else [lang.strip(), *fallbacks]
        else:
            candidates = list(lang)

        if cookies_source is None:
            cookies_source = config.cookies_source
        if use_cookies is None:
            use_cookies = config.use_cookies and cookies_source is not None

        return cls(
            video_id=video_id.strip() if isinstance(video_id, str) else video_id,
            language_candidates=tuple(dict.fromkeys(candidates)),
            timeout_ms=timeout_ms if timeout_ms is not None else config.timeout_ms,
            use_cookies=bool(use_cookies),
            cookies_source=cookies_source,
        )
