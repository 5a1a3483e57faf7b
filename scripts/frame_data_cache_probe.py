#!/usr/bin/env python3
"""Frame data cache probe.

Checks the CharacterDataCache against the live source without the rest of
the pipeline: a cold fetch, a cache hit, and single-flight behaviour for
concurrent callers.

Usage:
    python scripts/frame_data_cache_probe.py devil-jin

Expected Output:
    ✓ Cold fetch
    ✓ Cache hit
    ✓ Concurrent callers share one fetch
"""

import argparse
import asyncio
import sys
import time

from framecoach.adapters.tekkendocs import TekkenDocsAdapter
from framecoach.core.errors import MatchupEngineError
from framecoach.core.services import CharacterDataCache


async def probe(character_id: str) -> bool:
    async with TekkenDocsAdapter() as adapter:
        calls = 0

        async def counting_fetch(cid: str):
            nonlocal calls
            calls += 1
            return await adapter.fetch_frame_data(cid)

        cache = CharacterDataCache(counting_fetch)

        print(f"\n[1/3] Cold fetch for {character_id}...")
        start = time.perf_counter()
        try:
            moves = await cache.get(character_id)
        except MatchupEngineError as e:
            print(f"  ✗ Fetch failed: {e}")
            return False
        cold = time.perf_counter() - start
        print(f"  ✓ {len(moves)} moves in {cold:.3f}s")

        print("\n[2/3] Second call (should hit cache)...")
        start = time.perf_counter()
        await cache.get(character_id)
        warm = time.perf_counter() - start
        speedup = cold / warm if warm > 0 else float("inf")
        print(f"  {'✓' if calls == 1 else '✗'} {warm:.6f}s, speedup {speedup:.0f}x, upstream calls={calls}")

        print("\n[3/3] Concurrent callers after clear...")
        cache.clear(character_id)
        calls = 0
        await asyncio.gather(*(cache.get(character_id) for _ in range(5)))
        print(f"  {'✓' if calls == 1 else '✗'} 5 callers, upstream calls={calls}")

        return calls == 1


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("character_id", nargs="?", default="devil-jin")
    args = parser.parse_args()
    ok = asyncio.run(probe(args.character_id))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
