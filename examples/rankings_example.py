"""Example: Fetch leaderboards and resolve users with a cached client.

This script demonstrates how to:
1. Build a client from environment credentials with cache and metrics
2. Start several lazy requests concurrently and await them together
3. Resolve a username once and reuse the cached id for score lookups

Usage:
    OSU_CLIENT_ID=123 OSU_CLIENT_SECRET=... python examples/rankings_example.py
"""

import asyncio

from osuapi import GameMode, OsuBuilder
from osuapi.config import ClientConfig
from osuapi.metrics import CounterMetrics


async def main() -> None:
    config = ClientConfig.from_env()
    metrics = CounterMetrics()

    builder = OsuBuilder.from_config(config).with_cache().with_metrics(metrics)
    osu = await builder.build()

    async with osu:
        # Requests only hit the network once awaited or started
        standard = osu.performance_rankings(GameMode.OSU).page(1)
        mania_4k = osu.performance_rankings(GameMode.MANIA).variant_4k()
        countries = osu.country_rankings(GameMode.OSU)

        standard_rankings, mania_rankings, country_rankings = await asyncio.gather(
            standard.start(), mania_4k.start(), countries.start()
        )

        for stats in standard_rankings.ranking[:5]:
            name = stats.user.username if stats.user is not None else "?"
            print(f"#{stats.global_rank} {name}: {stats.pp}pp")

        print(f"Mania 4K entries: {len(mania_rankings.ranking)}")
        print(f"Top country: {country_rankings.ranking[0].code}")

        top = standard_rankings.ranking[0].user
        if top is not None:
            await osu.user(top.username)
            # Served from the cache, no second user lookup
            scores = await osu.user_scores(top.username).best().limit(3)
            for score in scores:
                print(f"{score.rank} {score.pp}pp")

    print(f"Request counts: {metrics.snapshot()}")


if __name__ == "__main__":
    asyncio.run(main())
