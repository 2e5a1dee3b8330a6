"""Parsing of memcached ``stats`` responses.

Every response is a series of ``STAT <key> <value>`` lines closed by ``END``.
Per-slab keys look like ``1:chunk_size``; per-item keys carry an extra
``items:`` prefix (``items:1:evicted``). Anything that does not fit is
skipped so one bad line never costs the rest of the response.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from howsit_tui.errors import ParseError, ValidationError


logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"[\r\n]+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Scope(Enum):
    GLOBAL = "stats"
    SLAB = "stats slabs"
    ITEM = "stats items"

    @property
    def command(self) -> str:
        return self.value


@dataclass(frozen=True)
class StatRecord:
    scope: Scope
    key: str
    value: str
    slab_id: int | None = None

    @property
    def slab_index(self) -> int | None:
        if self.slab_id is None:
            return None
        return self.slab_id - 1


def parse_int(value: str) -> int:
    """Leading integer of ``value``, or 0 when there is none."""
    match = _LEADING_INT.match(value)
    if match is None:
        return 0
    return int(match.group(1))


def split_stat_line(line: str) -> tuple[str, str]:
    tokens = line.split()
    if not tokens or tokens[0] != "STAT":
        raise ParseError(f"not a STAT line: {line!r}")
    if len(tokens) < 3:
        raise ParseError(f"missing key or value: {line!r}")
    return tokens[1], tokens[2]


def _split_slab_key(key: str) -> tuple[int, str]:
    parts = key.split(":")
    if parts[0] == "items":
        parts = parts[1:]
    if len(parts) < 2 or not parts[1]:
        raise ParseError(f"slab key without field name: {key!r}")
    try:
        slab_id = int(parts[0])
    except ValueError as exc:
        raise ValidationError(f"non-numeric slab id in {key!r}") from exc
    if slab_id <= 0:
        raise ValidationError(f"slab id must be positive in {key!r}")
    return slab_id, parts[1]


def parse_line(line: str, scope: Scope) -> StatRecord | None:
    """Parse one line; ``None`` means the line is well-formed but carries nothing to store."""
    key, value = split_stat_line(line)
    if scope is Scope.GLOBAL:
        if ":" in key:
            return None
        return StatRecord(scope, key, value)
    if ":" not in key:
        # Aggregates such as active_slabs or total_malloced.
        return None
    slab_id, name = _split_slab_key(key)
    return StatRecord(scope, name, value, slab_id)


def parse_stats_text(raw: str, scope: Scope) -> Iterator[StatRecord]:
    for line in _LINE_SPLIT.split(raw):
        if not line or line == "END":
            continue
        try:
            record = parse_line(line, scope)
        except (ParseError, ValidationError) as exc:
            logger.debug("skipping %s line: %s", scope.command, exc)
            continue
        if record is not None:
            yield record
