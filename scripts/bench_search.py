#!/usr/bin/env python3
"""Benchmark vector search: latency (p50, p95, p99) and QPS.

Seeds a fresh SQLite store with random vectors (no embedding API calls)
and times SqliteVectorStore.search.

Usage:
  python scripts/bench_search.py [--num-docs 500] [--chunks-per-doc 4] [--num-queries 100]
"""
from __future__ import annotations

import argparse
import asyncio
import os
import random
import statistics
import sys
import tempfile
import time

from augrag.domain.value_objects import TextChunk
from augrag.infrastructure.persistence.sqlite.vector_store import SqliteVectorStore


def random_vector(rng: random.Random, dimensions: int) -> list[float]:
    return [rng.uniform(-1.0, 1.0) for _ in range(dimensions)]


async def run(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed)
    with tempfile.TemporaryDirectory() as tmp:
        async with SqliteVectorStore(os.path.join(tmp, "bench.db"), args.dimensions) as store:
            print(f"Seeding {args.num_docs} documents x {args.chunks_per_doc} chunks...")
            for i in range(args.num_docs):
                texts = [f"Benchmark document {i} chunk {j}." for j in range(args.chunks_per_doc)]
                chunks = [TextChunk(index=j, text=t, size=len(t)) for j, t in enumerate(texts)]
                vectors = [random_vector(rng, args.dimensions) for _ in chunks]
                await store.save_document(f"bench-{i}", chunks, vectors)

            latencies: list[float] = []
            print(f"Running {args.num_queries} search requests (k={args.k})...")
            start_total = time.perf_counter()
            for _ in range(args.num_queries):
                query = random_vector(rng, args.dimensions)
                t0 = time.perf_counter()
                await store.search(query, args.k)
                latencies.append(time.perf_counter() - t0)
            total_elapsed = time.perf_counter() - start_total
            stats = await store.get_stats()

    n = len(latencies)
    if n == 0:
        print("No searches run.")
        return 1

    qps = n / total_elapsed
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = sorted(latencies)[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Search benchmark (vectors={stats.vector_count}, dimensions={args.dimensions}, queries={n})\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    if args.output:
        try:
            os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(summary)
            print(f"Wrote {args.output}")
        except OSError as exc:
            print(f"Could not write {args.output}: {exc}", file=sys.stderr)

    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark vector search")
    parser.add_argument("--num-docs", type=int, default=200, help="Documents to seed before search")
    parser.add_argument("--chunks-per-doc", type=int, default=4, help="Chunks per seeded document")
    parser.add_argument("--num-queries", type=int, default=50, help="Number of search requests")
    parser.add_argument("--dimensions", type=int, default=1536, help="Vector dimensions")
    parser.add_argument("--k", type=int, default=10, help="Candidates per search")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--output", type=str, default="", help="Optional output file path")
    args = parser.parse_args()
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
