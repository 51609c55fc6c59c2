# scripts/demo_lock.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from redislock import Lock, LockAcquisitionError
from redislock.config.settings import get_settings
from redislock.infrastructure.cache.redis_client import create_redis


async def demo():
    conn = create_redis(get_settings().redis_url)

    lock_a = Lock(conn, {"timeout": 1000})
    lock_b = Lock(conn, {"retries": 0})

    await lock_a.acquire("demo:res1")
    print("A holds:", await conn.get("demo:res1") == lock_a.id)

    try:
        await lock_b.acquire("demo:res1")
    except LockAcquisitionError as exc:
        print("B refused:", exc.message)

    await lock_a.release()
    await lock_b.acquire("demo:res1")
    print("B holds after A released:", lock_b.locked)
    await lock_b.release()

    await conn.aclose()

asyncio.run(demo())
