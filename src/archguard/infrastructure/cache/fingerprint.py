"""Cache keys and content fingerprints.

All fingerprints are SHA-256 hex digests. Tier 2 and tier 3 keys embed
every input that can invalidate the cached value, since those tiers
have no file-based validation of their own.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from archguard.domain.model.enums import Severity
    from archguard.domain.model.population import Population

logger = logging.getLogger(__name__)


def hash_bytes(data: bytes) -> str:
    """SHA-256 hex digest of data."""
    return hashlib.sha256(data).hexdigest()


def hash_text(text: str) -> str:
    """SHA-256 hex digest of UTF-8 text."""
    return hash_bytes(text.encode("utf-8"))


def file_fingerprint(path: Path | str) -> str | None:
    """Fingerprint of a file's current bytes.

    Args:
        path: Source file

    Returns:
        Hex digest, or None if the file cannot be read (forced miss)
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        logger.debug("Cannot fingerprint %s: %s", path, exc)
        return None
    return hash_bytes(data)


def population_fingerprint(population: Population) -> str:
    """Order-sensitive fingerprint of every entity's full content."""
    digest = hashlib.sha256()
    for entity in population:
        digest.update(repr(entity).encode("utf-8"))
        digest.update(b"\n")
    return digest.hexdigest()


def population_key(
    root: Path | str,
    include: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> str:
    """Tier 2 key for a traversal root and its include/exclude patterns.

    Pattern order does not change the key.
    """
    payload = json.dumps(
        {
            "root": str(root),
            "include": sorted(include),
            "exclude": sorted(exclude),
        },
        sort_keys=True,
    )
    return f"population:{hash_text(payload)}"


def rule_key(identity: str, severity: Severity, population_fp: str) -> str:
    """Tier 3 key for one rule evaluated against one population."""
    return f"rule:{hash_text(f'{identity}|{severity.name}|{population_fp}')}"


def graph_key(population_fp: str) -> str:
    """Tier 3 key for the dependency graph of one population."""
    return f"graph:{population_fp}"
