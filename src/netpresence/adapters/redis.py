"""Presence store backed by Redis sorted sets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import redis
from redis.exceptions import RedisError

from netpresence.domain.model import RawEntry
from netpresence.domain.ports import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from netpresence.config.store import RedisConfig

log = logging.getLogger(__name__)


def build_redis_client(config: RedisConfig) -> redis.Redis:
    """Create a client from configuration; ``url`` takes precedence over host/port."""

    if config.url:
        return redis.Redis.from_url(
            config.url,
            decode_responses=True,
            socket_timeout=config.socket_timeout,
        )
    return redis.Redis(
        host=config.host,
        port=config.port,
        password=config.password,
        socket_timeout=config.socket_timeout,
        decode_responses=True,
    )


class RedisPresenceStore:
    """One sorted set per network key; members are identity strings scored by last-seen."""

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    @classmethod
    def from_config(cls, config: RedisConfig) -> RedisPresenceStore:
        return cls(build_redis_client(config))

    def add(self, network_key: str, member: str, score: int) -> None:
        try:
            self.client.zadd(network_key, {member: score})
        except RedisError as exc:
            raise StoreUnavailableError(
                operation="add", network_key=network_key, reason=str(exc)
            ) from exc

    def range_with_scores(self, network_key: str) -> list[RawEntry]:
        try:
            # scores stay textual; the entry parser decides what is a valid timestamp
            reply = self.client.zrange(network_key, 0, -1, withscores=True, score_cast_func=str)
        except RedisError as exc:
            raise StoreUnavailableError(
                operation="range", network_key=network_key, reason=str(exc)
            ) from exc
        return [RawEntry(identity=_as_str(member), score=score) for member, score in reply]

    def remove(self, network_key: str, members: Iterable[str]) -> None:
        batch = list(members)
        if not batch:
            return
        try:
            removed = self.client.zrem(network_key, *batch)
        except RedisError as exc:
            raise StoreUnavailableError(
                operation="remove", network_key=network_key, reason=str(exc)
            ) from exc
        log.debug("ZREM %s: %s of %d members removed", network_key, removed, len(batch))

    def close(self) -> None:
        self.client.close()


def _as_str(value: str | bytes) -> str:
    return value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value
