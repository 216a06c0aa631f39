"""
Reviewsim Demo — One-Year Reward & Reputation Projection

Runs a preset reviewer scenario through the cycle simulator and prints
the balance, reward and reputation trajectory, sampled every few cycles.

Usage:
    python -m reviewsim.demo.run
    python -m reviewsim.demo.run --preset professional --weights community --seed 7
    python -m reviewsim.demo.run --preset casual --base-stake 600 --growth linear
    python -m reviewsim.demo.run --output projection.json
"""

import argparse
import json
from typing import Any, Dict, Optional

from reviewsim.core.config import ReviewsimConfig
from reviewsim.core.exceptions import UnknownPreset
from reviewsim.core.models import (
    GrowthLaw, LuckFactor, RewardModel, SimulationInput, SimulationResult,
)
from reviewsim.core.presets import PRESET_SCENARIOS, WEIGHT_SYSTEMS, load_preset
from reviewsim.engine.simulator import simulate


# ── Output Formatting ─────────────────────────────────────────

def format_header(preset: str, params: SimulationInput):
    print("\n" + "=" * 78)
    print(f"  REVIEWSIM PROJECTION — {PRESET_SCENARIOS[preset]['label']}")
    print(f"  {PRESET_SCENARIOS[preset]['description']}")
    print("=" * 78)
    weights = params.weight_config
    name = weights if isinstance(weights, str) else weights.name
    print(f"  Stake/review: {params.base_stake:,.0f}   Pool: {params.project_pool:,.0f}   "
          f"Reviews/cycle: {params.reviews_per_cycle}   Reviewers: {params.total_reviewers}")
    print(f"  Holdings: {params.token_holdings:,.0f}   Reputation: {params.starting_reputation:.2f}   "
          f"Review time: {params.avg_review_time:.0f}h   Weights: {name}")
    print(f"  Growth: {params.growth_law.value}   Reward: {params.reward_model.value}"
          + (f"   Luck: {params.luck.low:.2f}-{params.luck.high:.2f}" if params.luck else ""))


def format_trajectory(result: SimulationResult, every: int):
    print(f"\n{'─' * 78}")
    print(f"  {'CYCLE':>5} {'DAY':>5} {'BALANCE':>14} {'REWARD':>12} "
          f"{'ROI %':>10} {'REP':>6} {'GROWTH':>8} {'SHARE':>7}")
    print(f"{'─' * 78}")

    last = len(result.records)
    for record in result.records:
        if record.cycle % every and record.cycle not in (1, last):
            continue
        bar_len = int(record.reputation * 4)
        print(f"  {record.cycle:>5} {record.days:>5} {record.balance:>14,.2f} "
              f"{record.reward:>12,.2f} {record.roi:>10,.1f} {record.reputation:>6.2f} "
              f"{record.growth_rate:>8.4f} {record.share_of_pool or 0:>7.1%}  "
              f"{'#' * bar_len}")


def format_summary(result: SimulationResult, num_cycles: int):
    print(f"\n{'=' * 78}")
    print("  PROJECTION COMPLETE" if result.completed else "  PROJECTION HALTED")
    print(f"{'=' * 78}")

    print(f"\n  Summary:")
    print(f"    Cycles completed:    {len(result.records)}/{num_cycles}")

    final = result.final_record
    if final:
        total_reward = sum(result.series("reward"))
        print(f"    Final balance:       {final.balance:,.2f}")
        print(f"    Total rewards:       {total_reward:,.2f}")
        print(f"    ROI:                 {final.roi:,.1f}%")
        print(f"    Final reputation:    {final.reputation:.3f}")

    if result.halt:
        print(f"\n  Halt:")
        print(f"    Reason:              {result.halt.reason.value}")
        print(f"    Cycle:               {result.halt.cycle}")
        print(f"    Detail:              {result.halt.message}")


# ── Demo Runner ───────────────────────────────────────────────

def run_demo(
    preset: str = "casual",
    weights: str = "current",
    overrides: Optional[Dict[str, Any]] = None,
    every: int = 6,
    output_path: Optional[str] = None,
    quiet: bool = False,
) -> Dict[str, Any]:
    config = ReviewsimConfig.from_env()
    params = load_preset(preset, weight_config=weights, **(overrides or {}))
    num_cycles = params.cycles if params.cycles is not None else config.engine.horizon_cycles

    result = simulate(params, config=config.engine)

    if not quiet:
        format_header(preset, params)
        format_trajectory(result, every)
        format_summary(result, num_cycles)

    output = {
        "demo": "reviewsim_projection",
        "config": {
            "preset": preset,
            "weights": weights,
            "params": params.model_dump(mode="json", exclude={"weight_config"}),
            "engine": config.engine.model_dump(),
        },
        "result": result.model_dump(mode="json"),
    }

    if output_path:
        with open(output_path, "w") as f:
            json.dump(output, f, indent=2)
        if not quiet:
            print(f"\n  Results written to: {output_path}")

    return output


# ── CLI Entry Point ───────────────────────────────────────────

def main():
    parser = argparse.ArgumentParser(
        description="Reviewsim Reward & Reputation Projection"
    )
    parser.add_argument("--preset", choices=sorted(PRESET_SCENARIOS), default="casual",
                        help="Reviewer scenario (default: casual)")
    parser.add_argument("--weights", choices=sorted(WEIGHT_SYSTEMS), default="current",
                        help="Weight system (default: current)")
    parser.add_argument("--base-stake", type=float, default=None,
                        help="Override stake per review")
    parser.add_argument("--pool", type=float, default=None,
                        help="Override project pool")
    parser.add_argument("--reviews", type=int, default=None,
                        help="Override reviews per cycle")
    parser.add_argument("--reviewers", type=int, default=None,
                        help="Override total reviewers")
    parser.add_argument("--holdings", type=float, default=None,
                        help="Override token holdings (starting balance)")
    parser.add_argument("--reputation", type=float, default=None,
                        help="Override starting reputation")
    parser.add_argument("--review-time", type=float, default=None,
                        help="Override average review time in hours")
    parser.add_argument("--growth", choices=[g.value for g in GrowthLaw],
                        default=GrowthLaw.DIMINISHING.value,
                        help="Reputation growth law (default: diminishing)")
    parser.add_argument("--reward", choices=[r.value for r in RewardModel],
                        default=RewardModel.POOL_SHARE.value,
                        help="Reward model (default: pool_share)")
    parser.add_argument("--luck", type=float, nargs=2, metavar=("LOW", "HIGH"), default=None,
                        help="Bounded random reward multiplier")
    parser.add_argument("--seed", type=int, default=2024,
                        help="Random seed (default: 2024)")
    parser.add_argument("--cycles", type=int, default=None,
                        help="Horizon override (default: 73)")
    parser.add_argument("--every", type=int, default=6,
                        help="Print every Nth cycle (default: 6)")
    parser.add_argument("--output", type=str, default=None,
                        help="Path to write JSON results")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress console output")

    args = parser.parse_args()

    overrides = {
        "base_stake": args.base_stake,
        "project_pool": args.pool,
        "reviews_per_cycle": args.reviews,
        "total_reviewers": args.reviewers,
        "token_holdings": args.holdings,
        "starting_reputation": args.reputation,
        "avg_review_time": args.review_time,
        "cycles": args.cycles,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    overrides["growth_law"] = GrowthLaw(args.growth)
    overrides["reward_model"] = RewardModel(args.reward)
    overrides["seed"] = args.seed
    if args.luck:
        overrides["luck"] = LuckFactor(low=args.luck[0], high=args.luck[1])

    try:
        run_demo(
            preset=args.preset,
            weights=args.weights,
            overrides=overrides,
            every=max(1, args.every),
            output_path=args.output,
            quiet=args.quiet,
        )
    except UnknownPreset as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
