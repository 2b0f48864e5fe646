"""Read log files from disk or stdin into plain text ready for the rule engine."""

from __future__ import annotations

import gzip
import logging
import sys
from pathlib import Path

from .config import Settings

logger = logging.getLogger(__name__)

STDIN = "-"


class LogRejectedError(ValueError):
    """File is not an accepted log: wrong extension, too large, or unreadable."""


def is_valid_log(name: str, size: int, settings: Settings) -> bool:
    """Allowed extension and strictly below the size cap."""
    return size < settings.max_log_bytes and any(
        name.endswith(ext) for ext in settings.log_extensions
    )


def _decode(raw: bytes, settings: Settings, source: str) -> str:
    if len(raw) > settings.max_text_bytes:
        logger.warning(
            "%s: more than %d bytes of text, only the first %d are analyzed",
            source, settings.max_text_bytes, settings.max_text_bytes,
        )
        raw = raw[: settings.max_text_bytes]
    text = raw.decode("utf-8", errors="replace")
    # Crash reports saved on Windows use CRLF; rule patterns spell out \n
    return text.replace("\r\n", "\n")


def read_log(path: Path | str, settings: Settings) -> str:
    """Return the decoded text of one log. '.gz' files are decompressed."""
    if str(path) == STDIN:
        return _decode(sys.stdin.buffer.read(settings.max_text_bytes + 1), settings, "<stdin>")

    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError as e:
        raise LogRejectedError(f"{path}: {e.strerror or e}") from e
    if not is_valid_log(path.name, size, settings):
        if size >= settings.max_log_bytes:
            raise LogRejectedError(f"{path}: {size} bytes, limit is {settings.max_log_bytes}")
        raise LogRejectedError(
            f"{path}: not a log file (accepted: {', '.join(settings.log_extensions)})"
        )

    try:
        if path.name.endswith(".gz"):
            with gzip.open(path, "rb") as f:
                raw = f.read(settings.max_text_bytes + 1)
        else:
            raw = path.read_bytes()
    except (OSError, EOFError) as e:
        raise LogRejectedError(f"{path}: {e}") from e
    logger.debug("Read %s (%d bytes)", path, len(raw))
    return _decode(raw, settings, str(path))
