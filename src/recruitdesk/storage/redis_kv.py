"""
Redis-backed alert ledger.

Lets several dashboard processes (or an operator with redis-cli) see which
interview alerts the running monitor has already raised. Keys live in one
Redis set per monitor run and the set is deleted when the monitor stops,
so nothing carries over to the next run.
"""

from __future__ import annotations
import uuid
from typing import Optional
import redis
from recruitdesk.logging import logger


class RedisAlertLedger:
    """
    Redis implementation of the AlertLedger protocol.

    Read errors are logged and treated as "not seen"; write errors are
    logged and re-raised for the caller (the monitor tick) to absorb.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        key_prefix: str = "recruitdesk:alerts",
        run_id: Optional[str] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """
        Initialize Redis connection.

        Args:
            host: Redis server hostname
            port: Redis server port
            db: Redis database number
            key_prefix: Prefix of the per-run set key
            run_id: Identifier of this monitor run (random when omitted)
            client: Pre-built client, mainly for tests

        Raises:
            redis.ConnectionError: If connection to Redis fails
        """
        self.key = f"{key_prefix}:{run_id or uuid.uuid4().hex}"
        if client is not None:
            self.client = client
            return

        try:
            self.client = redis.Redis(
                host=host,
                port=port,
                db=db,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            self.client.ping()
            logger.info(f"Connected to Redis at {host}:{port}/{db} (ledger key '{self.key}')")
        except redis.ConnectionError as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise

    def contains(self, key: str) -> bool:
        try:
            return bool(self.client.sismember(self.key, key))
        except redis.RedisError as e:
            logger.warning(f"Redis SISMEMBER error for '{key}': {e}")
            return False

    def add(self, key: str) -> None:
        try:
            self.client.sadd(self.key, key)
            logger.debug(f"Ledger add '{key}'")
        except redis.RedisError as e:
            logger.error(f"Redis SADD error for '{key}': {e}")
            raise

    def clear(self) -> None:
        try:
            self.client.delete(self.key)
            logger.debug(f"Deleted ledger key '{self.key}'")
        except redis.RedisError as e:
            logger.warning(f"Redis DELETE error for '{self.key}': {e}")

    def __len__(self) -> int:
        try:
            return int(self.client.scard(self.key))
        except redis.RedisError as e:
            logger.warning(f"Redis SCARD error for '{self.key}': {e}")
            return 0
