"""
Base classes for external tool wrappers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass
class ToolResult:
    """Result from running an external tool."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    error: str | None = None
    timed_out: bool = False
    not_found: bool = False

    @classmethod
    def from_error(
        cls, error: str, *, timed_out: bool = False, not_found: bool = False
    ) -> ToolResult:
        """Create a failed result from an error message."""
        return cls(
            success=False,
            error=error,
            returncode=-1,
            timed_out=timed_out,
            not_found=not_found,
        )

    @classmethod
    def ok(cls, stdout: str = "", stderr: str = "") -> ToolResult:
        """Create a successful result."""
        return cls(success=True, stdout=stdout, stderr=stderr, returncode=0)


class ExternalTool(ABC):
    """Abstract base class for external command-line tools."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name for logging and error messages."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the tool is installed and available."""
        pass

    @abstractmethod
    def get_path(self) -> str:
        """Get the path to the tool executable."""
        pass


@runtime_checkable
class SubtitleDownloader(Protocol):
    """What the retrieval orchestrator needs from a downloader."""

    def is_available(self) -> bool: ...

    def download_subtitles(
        self,
        video_id: str,
        lang: str,
        output_dir: Path,
        timeout: float,
        cookies_path: Path | None = None,
    ) -> ToolResult: ...
