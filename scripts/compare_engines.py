"""
Compare the selection engines on a synthetic catalog.

Runs every engine on the same catalog and target and prints cost, number of
selected assets, selected volume and wall time, plus how much more greedy
and hybrid pay than the exact DP result.

Usage:
    python -m scripts.compare_engines [--target KW] [--count N] [--seed S]

Examples:
    # One comparison on the default catalog
    python -m scripts.compare_engines --target 50000

    # Large target, skip the exact engine
    python -m scripts.compare_engines --target 400000 --exclude-dp

    # Find the seed where greedy is furthest from optimal
    python -m scripts.compare_engines --target 5000 --count 200 --seeds 50
"""

import argparse
import time
from datetime import date
from typing import Optional

from app.engine import (
    DynamicProgrammingEngine,
    GreedyEngine,
    HybridEngine,
    SelectionEngine,
    total_cost,
    total_volume,
)
from app.models import Asset, SelectionSuccess
from app.provider import generate_assets


def run_engine(engine: SelectionEngine, target: int, assets: list[Asset]) -> dict:
    """Run one engine and collect its statistics."""
    start = time.perf_counter()
    result = engine.select_assets(target, assets)
    elapsed = time.perf_counter() - start

    if isinstance(result, SelectionSuccess):
        return {
            "ok": True,
            "cost": total_cost(result.assets),
            "count": len(result.assets),
            "volume": total_volume(result.assets),
            "seconds": elapsed,
        }
    return {"ok": False, "reason": result.reason, "seconds": elapsed}


def compare(target: int, assets: list[Asset], exclude_dp: bool = False) -> dict[str, dict]:
    engines: dict[str, SelectionEngine] = {
        "greedy": GreedyEngine(),
        "hybrid": HybridEngine(),
    }
    if not exclude_dp:
        engines = {"dp": DynamicProgrammingEngine(), **engines}
    return {name: run_engine(engine, target, assets) for name, engine in engines.items()}


def gap_percent(stats: dict, baseline: dict) -> Optional[float]:
    """Extra cost of stats over baseline in percent, if both succeeded."""
    if not (stats["ok"] and baseline["ok"]) or baseline["cost"] == 0:
        return None
    return (stats["cost"] - baseline["cost"]) / baseline["cost"] * 100


def print_report(target: int, results: dict[str, dict]) -> None:
    print(f"\nTarget: {target:,} kW")
    print("-" * 72)
    print(f"{'engine':<8} {'cost':>14} {'assets':>8} {'volume':>12} {'time (s)':>10} {'vs dp':>10}")
    print("-" * 72)
    baseline = results.get("dp")
    for name, stats in results.items():
        if not stats["ok"]:
            print(f"{name:<8} FAILED: {stats['reason']} ({stats['seconds']:.3f}s)")
            continue
        gap = gap_percent(stats, baseline) if baseline else None
        gap_text = f"{gap:+.2f}%" if gap is not None else "-"
        print(
            f"{name:<8} {stats['cost']:>14,.2f} {stats['count']:>8} "
            f"{stats['volume']:>12,} {stats['seconds']:>10.3f} {gap_text:>10}"
        )


def search_seeds(args: argparse.Namespace, today: date) -> None:
    """Report the seed with the largest greedy-over-DP gap."""
    worst_seed = None
    worst_gap = 0.0
    for seed in range(args.seed, args.seed + args.seeds):
        assets = generate_assets(
            args.count,
            today,
            total_volume_target=args.total_volume,
            seed=seed,
            base_price_factor=args.price_factor,
        )
        dp = run_engine(DynamicProgrammingEngine(), args.target, assets)
        greedy = run_engine(GreedyEngine(), args.target, assets)
        gap = gap_percent(greedy, dp)
        if gap is not None and gap > worst_gap:
            worst_seed, worst_gap = seed, gap

    if worst_seed is None:
        print(f"Greedy matched DP on all {args.seeds} seeds")
        return
    print(f"Largest greedy gap: {worst_gap:.2f}% at seed {worst_seed}")
    assets = generate_assets(
        args.count,
        today,
        total_volume_target=args.total_volume,
        seed=worst_seed,
        base_price_factor=args.price_factor,
    )
    print_report(args.target, compare(args.target, assets))


def main():
    parser = argparse.ArgumentParser(
        description="Compare DP, greedy and hybrid selection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--target", type=int, default=50_000, help="Target volume in kW")
    parser.add_argument("--count", type=int, default=1500, help="Catalog size")
    parser.add_argument(
        "--total-volume", type=int, default=1_000_000, help="Approximate catalog volume"
    )
    parser.add_argument("--seed", type=int, default=0, help="Catalog seed")
    parser.add_argument("--price-factor", type=float, default=2.0, help="Base cost per kW")
    parser.add_argument(
        "--exclude-dp", action="store_true", help="Skip the exact engine for large targets"
    )
    parser.add_argument(
        "--seeds",
        type=int,
        default=0,
        help="Search this many seeds for the largest greedy gap",
    )
    args = parser.parse_args()

    today = date.today()
    if args.seeds > 0:
        search_seeds(args, today)
        return

    assets = generate_assets(
        args.count,
        today,
        total_volume_target=args.total_volume,
        seed=args.seed,
        base_price_factor=args.price_factor,
    )
    print(f"Catalog: {len(assets)} assets, {total_volume(assets):,} kW")
    print_report(args.target, compare(args.target, assets, exclude_dp=args.exclude_dp))


if __name__ == "__main__":
    main()
