"""Decode raw store replies into parsed presence entries."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from netpresence.domain.model import ParsedEntry, RawEntry, decode_identity

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from netpresence.domain.model import RawScore


def parse_entries(raw: Sequence[object]) -> list[ParsedEntry]:
    """Parse a store reply into entries, preserving order.

    ``raw`` is either a flat alternating ``identity, score, ...`` sequence or a
    sequence of ``(identity, score)`` pairs / ``RawEntry`` objects.
    """

    return [
        _parse_entry(entry, position=position)
        for position, entry in enumerate(_iter_raw_entries(raw))
    ]


def parse_score(raw: RawScore) -> int | None:
    """Parse a stored score as epoch milliseconds; ``None`` when it is not a number."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None

    try:
        text = _as_text(raw).strip()
    except UnicodeDecodeError:
        return None
    if not text or "_" in text:
        return None
    try:
        return int(text, 10)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    return int(value) if math.isfinite(value) else None


def _parse_entry(entry: RawEntry, *, position: int) -> ParsedEntry:
    name, address = decode_identity(entry.identity)
    return ParsedEntry(
        key=entry.identity,
        name=name,
        address=address,
        last_seen=parse_score(entry.score),
        position=position,
    )


def _iter_raw_entries(raw: Sequence[object]) -> Iterator[RawEntry]:
    if not raw:
        return
    if isinstance(raw[0], (RawEntry, tuple, list)):
        for item in raw:
            yield _coerce_pair(item)
        return

    # flat reply; a trailing identity without a score gets no score
    for index in range(0, len(raw), 2):
        score = raw[index + 1] if index + 1 < len(raw) else None
        yield RawEntry(identity=_as_identity(raw[index]), score=_as_score(score))


def _coerce_pair(item: object) -> RawEntry:
    if isinstance(item, RawEntry):
        return item
    if isinstance(item, (tuple, list)) and len(item) == 2:
        identity, score = item
        return RawEntry(identity=_as_identity(identity), score=_as_score(score))
    raise TypeError(f"Expected an (identity, score) pair, got {item!r}")


def _as_identity(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _as_score(value: object) -> RawScore:
    if value is None or isinstance(value, (str, bytes, int, float)):
        return value
    return str(value)


def _as_text(value: str | bytes) -> str:
    return value.decode("ascii") if isinstance(value, bytes) else value
