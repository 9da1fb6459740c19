#!/usr/bin/env python3
"""
Performance benchmark for prompt clustering.

Usage:
    python scripts/benchmark_performance.py --prompts 20000 --strategy first_match
"""
import sys
import time
import random
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ccql.config import AssignmentStrategy, DedupConfig, EditMetric
from ccql.services.clustering_service import PromptClusteringService
from ccql.logging_config import setup_logging, get_logger

logger = get_logger('benchmark')

BASE_PROMPTS = [
    "continue",
    "commit this",
    "run the tests",
    "fix the failing test",
    "explain this error",
    "update the readme",
    "add type hints to this module",
    "refactor this function to be smaller",
    "why is the build failing",
    "write unit tests for the parser",
]

NOISE = [
    "import os",
    "// TODO remove",
    "```python\nprint(1)\n```",
    "{\"key\": 1}",
    "at main.js:12:5",
    "ok",
]


def add_typo(text: str, rng: random.Random) -> str:
    """Apply one random edit: swap, drop, duplicate or replace a character."""
    if len(text) < 3:
        return text
    i = rng.randrange(len(text) - 1)
    kind = rng.choice(("swap", "drop", "dup", "replace"))
    if kind == "swap":
        return text[:i] + text[i + 1] + text[i] + text[i + 2:]
    if kind == "drop":
        return text[:i] + text[i + 1:]
    if kind == "dup":
        return text[:i] + text[i] + text[i:]
    return text[:i] + rng.choice("abcdefghijklmnopqrstuvwxyz") + text[i + 1:]


def generate_prompts(count: int, seed: int = 42) -> list:
    """Generate a synthetic, noisy prompt history."""
    rng = random.Random(seed)
    prompts = []
    for i in range(count):
        roll = rng.random()
        if roll < 0.05:
            prompts.append(rng.choice(NOISE))
        elif roll < 0.55:
            prompts.append(rng.choice(BASE_PROMPTS))
        elif roll < 0.80:
            prompts.append(add_typo(rng.choice(BASE_PROMPTS), rng))
        else:
            # Long tail of unique prompts
            prompts.append(f"look at issue {i} in {rng.choice(['api', 'cli', 'docs', 'ui'])} and report back")
    return prompts


def benchmark(prompts: list, config: DedupConfig) -> dict:
    service = PromptClusteringService(config)

    start = time.perf_counter()
    clusters = service.cluster(prompts)
    duration = time.perf_counter() - start

    stats = service.get_cluster_statistics(clusters)
    distinct = stats['distinct_prompts']
    return {
        'duration': duration,
        'prompts': len(prompts),
        'distinct': distinct,
        'clusters': len(clusters),
        'compression': distinct / len(clusters) if clusters else 0.0,
        'throughput': len(prompts) / duration if duration > 0 else float('inf'),
    }


def main():
    parser = argparse.ArgumentParser(description='Benchmark prompt clustering')
    parser.add_argument('--prompts', type=int, default=20000,
                        help='Number of synthetic prompts')
    parser.add_argument('--threshold', type=float, default=0.8,
                        help='Similarity threshold')
    parser.add_argument('--strategy', default='first_match',
                        choices=[s.value for s in AssignmentStrategy])
    parser.add_argument('--metric', default='osa',
                        choices=[m.value for m in EditMetric])
    parser.add_argument('--seed', type=int, default=42)
    parser.add_argument('--dev-mode', action='store_true',
                        help='Enable developer mode logging')

    args = parser.parse_args()

    if args.dev_mode:
        import os
        os.environ['CCQL_DEV_MODE'] = '1'
    setup_logging(level=None if args.dev_mode else "INFO")

    config = DedupConfig(
        similarity_threshold=args.threshold,
        metric=args.metric,
        strategy=args.strategy,
    )

    logger.info(f"Generating {args.prompts} synthetic prompts...")
    prompts = generate_prompts(args.prompts, seed=args.seed)

    result = benchmark(prompts, config)

    print("\n" + "=" * 80)
    print("BENCHMARK SUMMARY")
    print("=" * 80)
    print(f"Strategy:  {args.strategy} ({args.metric}, threshold {args.threshold})")
    print(f"Prompts:   {result['prompts']}")
    print(f"Distinct:  {result['distinct']}")
    print(f"Clusters:  {result['clusters']}")
    print(f"Distinct per cluster: {result['compression']:.2f}")
    print(f"Duration:  {result['duration']:.3f}s")
    print(f"Throughput: {result['throughput']:.0f} prompts/sec")
    print("=" * 80)

    return 0


if __name__ == '__main__':
    sys.exit(main())
