#!/usr/bin/env python3
"""CLI entry point for the dart practice engine.

Usage:
    python main.py throw [target] [preset]        Throw 3 simulated darts (e.g. T20 expert)
    python main.py probability [target] [sd_mm]   Monte Carlo hit probability
    python main.py leg [preset] [start]           Simulate a full 01 leg and print stats
    python main.py analyze                        Generate analysis charts
    python main.py test                           Run all tests

Add -v anywhere for debug logging.
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

logger = logging.getLogger("dartcore.cli")


def _args():
    return [a for a in sys.argv[2:] if a not in ("-v", "--verbose")]


def cmd_throw():
    """Throw three simulated darts at a target."""
    from dartcore.throws import DIFFICULTY_PRESETS, execute_throw, get_preset_std_dev
    from dartcore.scoring import get_score_label
    from dartcore.targets import parse_target_label

    args = _args()
    target = parse_target_label(args[0] if args else "T20")
    preset = args[1] if len(args) > 1 and args[1] in DIFFICULTY_PRESETS else "intermediate"
    sd = get_preset_std_dev(preset)

    print(f"  Aiming at {target.label} ({DIFFICULTY_PRESETS[preset]['label']}, sd {sd:.0f}mm)")
    total = 0
    for i in range(3):
        t = execute_throw(target, sd)
        label = get_score_label(t.ring, t.segment_number)
        total += t.score
        print(f"  Dart {i + 1}: ({t.landing_point.x:7.1f}, {t.landing_point.y:7.1f}) mm  "
              f"{label:>5s}  = {t.score}")
    print(f"  Round total: {total}")


def cmd_probability():
    """Estimate the hit probability of a target for a given scatter."""
    from dartcore.targets import get_target_coordinates, parse_target_label
    from dartcore.throws import calculate_hit_probability
    from dartcore.types import TargetType

    args = _args()
    target = parse_target_label(args[0] if args else "T20")
    sd = float(args[1]) if len(args) > 1 else 15.0

    aim = get_target_coordinates(target.type, target.number)
    if target.type is TargetType.BULL:
        p = calculate_hit_probability(aim.x, aim.y, sd, "INNER_BULL")
    else:
        p = calculate_hit_probability(aim.x, aim.y, sd, target.type.value, target.number)
    print(f"  {target.label} at sd {sd:.1f}mm: {p:.1%}")


def cmd_leg():
    """Simulate a full 01 leg and print round-by-round scores."""
    from dartcore.throws import DIFFICULTY_PRESETS, get_preset_std_dev
    from dartcore.game import simulate_leg

    args = _args()
    preset = args[0] if args and args[0] in DIFFICULTY_PRESETS else "advanced"
    start = int(args[1]) if len(args) > 1 else 501
    sd = get_preset_std_dev(preset)

    print("=" * 60)
    print(f"  {start} LEG: {DIFFICULTY_PRESETS[preset]['label']} (sd {sd:.0f}mm)")
    print("=" * 60)

    result = simulate_leg(sd, start_score=start)
    for i, r in enumerate(result.rounds):
        darts = " ".join(f"{t.score:>2d}" for t in r.throws)
        note = ""
        if r.bust is not None:
            note = f"BUST ({r.bust.reason.value})"
        elif r.finished:
            note = "CHECKOUT"
        print(f"  Round {i + 1:3d}: [{darts:>8s}]  {r.round_score:3d}  left {r.end_remaining:3d}  {note}")

    s = result.stats
    print()
    print(f"  Finished: {s['finished']}  |  Rounds: {s['rounds']}  |  Darts: {s['darts_thrown']}")
    print(f"  Three-dart average: {s['three_dart_average']}")
    print(f"  Busts: {s['busts']} {s['bust_reasons']}  |  Misses: {s['misses']}")
    print("  Available presets: " + ", ".join(DIFFICULTY_PRESETS))
    print("=" * 60)


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from dartsim.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "output")
    paths = generate_all_charts(output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "throw": cmd_throw,
    "probability": cmd_probability,
    "leg": cmd_leg,
    "analyze": cmd_analyze,
    "test": cmd_test,
}


def main():
    verbose = "-v" in sys.argv or "--verbose" in sys.argv
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    try:
        COMMANDS[sys.argv[1]]()
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(2)


if __name__ == "__main__":
    main()
