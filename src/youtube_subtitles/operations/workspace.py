"""
Request-scoped scratch directories for yt-dlp output.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from youtube_subtitles.config.defaults import WORKDIR_PREFIX
from youtube_subtitles.exceptions import CleanupFailedError

logger = logging.getLogger(__name__)


def remove_working_area(path: Path) -> bool:
    """Remove a working directory tree.

    Failures are logged as CleanupFailedError warnings and never raised.

    Returns:
        True if the directory is gone afterwards
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning(str(CleanupFailedError(str(path), e)))
        return False
    return True


def create_working_area(base_dir: Path | None = None) -> Path:
    """Create a uniquely named, empty temp directory.

    Args:
        base_dir: Parent directory (system temp dir by default)

    Raises:
        OSError: If the directory cannot be created
    """
    path = Path(tempfile.mkdtemp(prefix=WORKDIR_PREFIX, dir=base_dir))
    logger.debug(f"Created working area {path}")
    return path


@contextmanager
def working_area(base_dir: Path | None = None) -> Iterator[Path]:
    """Create a working area and remove it on exit, whatever the outcome."""
    path = create_working_area(base_dir)
    try:
        yield path
    finally:
        remove_working_area(path)
