from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class CandidateLoadError(RuntimeError):
    """Raised when a candidate file cannot be read."""


def load_candidates(path: Path) -> list[str]:
    """Read one candidate per line, skipping blanks and repeated names."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CandidateLoadError(f"Cannot read candidates from {path}: {exc}") from exc

    seen: set[str] = set()
    candidates: list[str] = []
    for line in content.splitlines():
        name = line.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        candidates.append(name)

    logger.info("Loaded %d candidates from %s", len(candidates), path)
    return candidates
