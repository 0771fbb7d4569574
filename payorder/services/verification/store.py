"""Processed-payment bookkeeping so one payment is honoured only once.

`claim` is an atomic first-writer-wins marker: it returns True for the first
verification of a payment id and False for every later one until the TTL
expires.
"""

import threading
import time
from abc import ABC, abstractmethod

import redis

from payorder.common.config import Settings


class ProcessedPaymentStore(ABC):
    """Interface shared by the Redis and in-process stores."""

    @abstractmethod
    def claim(self, payment_id: str, order_id: str) -> bool:
        """Mark `payment_id` processed; False when it already was."""


def _processed_key(payment_id: str) -> str:
    return f"processed:payment:{payment_id}"


class RedisProcessedPaymentStore(ProcessedPaymentStore):
    """Stores markers with `SET NX EX` so concurrent workers agree on the winner."""

    def __init__(self, client: redis.Redis, ttl_seconds: int) -> None:
        self.client = client
        self.ttl_seconds = ttl_seconds

    def claim(self, payment_id: str, order_id: str) -> bool:
        created = self.client.set(_processed_key(payment_id), order_id, nx=True, ex=self.ttl_seconds)
        return bool(created)


class InMemoryProcessedPaymentStore(ProcessedPaymentStore):
    """Single-process store for development and tests."""

    def __init__(self, ttl_seconds: int) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def _evict_expired(self, now: float) -> None:
        expired = [pid for pid, (_, expires_at) in self._entries.items() if expires_at <= now]
        for pid in expired:
            del self._entries[pid]

    def claim(self, payment_id: str, order_id: str) -> bool:
        now = time.monotonic()
        with self._lock:
            self._evict_expired(now)
            if payment_id in self._entries:
                return False
            self._entries[payment_id] = (order_id, now + self.ttl_seconds)
            return True

    def __len__(self) -> int:
        return len(self._entries)


def build_store(settings: Settings) -> ProcessedPaymentStore:
    if settings.redis_url:
        client = redis.Redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_timeout=settings.redis_timeout_seconds,
            socket_connect_timeout=settings.redis_timeout_seconds,
        )
        return RedisProcessedPaymentStore(client, settings.processed_payment_ttl_seconds)
    return InMemoryProcessedPaymentStore(settings.processed_payment_ttl_seconds)
