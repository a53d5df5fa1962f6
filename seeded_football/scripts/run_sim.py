"""
Main simulation script for running seeded football matches.

Provides CLI interface and batch simulation capabilities.
"""

import argparse
import os
import sys
import time
from typing import Any, Dict, List, Optional

import numpy as np

from ..engine.errors import InvalidSeedError, SimulationError
from ..engine.events import EventType
from ..engine.match import MatchEngine, SimulationResult
from ..engine.prng import MASK64, SeedLike, parse_seed
from ..engine.team import TeamDescriptor
from ..logger.event_logger import MatchEventLogger


EXPORT_FORMATS = ("none", "csv", "xes", "both")


def simulate_single_match(fixture_id: str,
                          seed: SeedLike,
                          home_team: Optional[TeamDescriptor] = None,
                          away_team: Optional[TeamDescriptor] = None,
                          verbose: bool = True) -> Dict[str, Any]:
    """
    Simulate a single fixture.

    Args:
        fixture_id: Fixture identifier
        seed: Fixture seed (int or hex string)
        home_team: Home descriptor (reference team if None)
        away_team: Away descriptor (reference team if None)
        verbose: Print detailed output

    Returns:
        Dict containing the result, its fingerprint and timing
    """
    seed = parse_seed(seed)
    if verbose:
        print(f"Setting up {fixture_id} with seed: 0x{seed:016X}")

    engine = MatchEngine(home_team, away_team)

    start_time = time.perf_counter()
    result = engine.simulate(fixture_id, seed)
    simulation_time = time.perf_counter() - start_time

    if verbose:
        print(f"Simulation completed in {simulation_time:.4f} seconds")
        print_match_summary(result, engine)

    return {
        "fixture_id": fixture_id,
        "seed": seed,
        "home_team": engine.home_team,
        "away_team": engine.away_team,
        "result": result,
        "fingerprint": result.fingerprint(),
        "simulation_time_seconds": simulation_time,
    }


def simulate_matches(n_matches: int = 1,
                     seed: SeedLike = 42,
                     fixture_id: str = "fixture-1",
                     out_dir: str = "logs",
                     export: str = "none",
                     verbose: bool = True) -> List[Dict[str, Any]]:
    """
    Simulate multiple fixtures with consecutive seeds.

    Args:
        n_matches: Number of matches to simulate
        seed: Base seed; match i uses seed + i wrapped to 64 bits
        fixture_id: Base fixture id; suffixed with the match number when n_matches > 1
        out_dir: Output directory for exported logs
        export: One of "none", "csv", "xes", "both"
        verbose: Print detailed output

    Returns:
        List of match results
    """
    if export not in EXPORT_FORMATS:
        raise SimulationError(f"Unknown export format: {export}")

    base_seed = parse_seed(seed)

    if verbose:
        print(f"Starting simulation of {n_matches} matches")
        if export != "none":
            print(f"Output directory: {out_dir}")

    if export != "none":
        os.makedirs(out_dir, exist_ok=True)

    results = []
    total_start_time = time.perf_counter()

    for i in range(n_matches):
        if verbose:
            print(f"\n--- Match {i+1}/{n_matches} ---")

        match_fixture_id = fixture_id if n_matches == 1 else f"{fixture_id}-{i+1}"
        match_seed = (base_seed + i) & MASK64

        result = simulate_single_match(match_fixture_id, match_seed, verbose=verbose)

        if export != "none":
            result["log_files"] = export_logs(result["result"], out_dir, export, verbose=verbose)

        results.append(result)

    total_time = time.perf_counter() - total_start_time

    if verbose:
        print(f"\n=== SIMULATION SUMMARY ===")
        print(f"Total matches: {n_matches}")
        print(f"Total time: {total_time:.2f} seconds")
        print_batch_summary(results)

    return results


def export_logs(result: SimulationResult,
                out_dir: str,
                export: str = "both",
                verbose: bool = True) -> Dict[str, str]:
    """
    Export one fixture's event log.

    Returns:
        Dict mapping format name to written path
    """
    event_logger = MatchEventLogger(result)
    stem = os.path.join(out_dir, result.match_report.fixture_id)
    written = {}

    if export in ("csv", "both"):
        written["csv"] = f"{stem}.csv"
        event_logger.export_to_csv(written["csv"], verbose=verbose)
    if export in ("xes", "both"):
        written["xes"] = f"{stem}.xes"
        event_logger.export_to_xes(written["xes"], verbose=verbose)

    return written


def print_match_summary(result: SimulationResult, engine: MatchEngine) -> None:
    """Print formatted match summary."""
    report = result.match_report
    home = engine.home_team.name
    away = engine.away_team.name

    print(f"\n=== MATCH SUMMARY ===")
    print(f"Final Score: {home} {report.home_score}-{report.away_score} {away}")

    for label, tally in (
        ("Possession %", report.possession),
        ("Shots", report.shots),
        ("Corners", report.corners),
        ("Fouls", report.fouls),
        ("Yellow cards", report.yellow_cards),
        ("Red cards", report.red_cards),
    ):
        print(f"{label}: {tally.home} - {tally.away}")

    goals = [line for line in report.events if line.event_type is EventType.GOAL]
    for line in goals:
        print(f"  {line.minute}' GOAL {line.team} ({line.player})")

    print(f"Events logged: {len(result.event_log)}")
    print(f"Fingerprint: {result.fingerprint()}")


def print_batch_summary(results: List[Dict[str, Any]]) -> None:
    """Print summary statistics across multiple matches."""
    if not results:
        return

    home_goals = np.array([r["result"].match_report.home_score for r in results])
    away_goals = np.array([r["result"].match_report.away_score for r in results])
    home_possession = np.array([r["result"].match_report.possession.home for r in results])
    event_counts = np.array([len(r["result"].event_log) for r in results])

    home_wins = int(np.sum(home_goals > away_goals))
    away_wins = int(np.sum(away_goals > home_goals))
    draws = len(results) - home_wins - away_wins

    print(f"\nResults Distribution:")
    print(f"  Home wins: {home_wins} ({home_wins/len(results)*100:.1f}%)")
    print(f"  Away wins: {away_wins} ({away_wins/len(results)*100:.1f}%)")
    print(f"  Draws: {draws} ({draws/len(results)*100:.1f}%)")

    print(f"\nAverages per match:")
    print(f"  Goals: {np.mean(home_goals + away_goals):.2f}")
    print(f"  Home possession: {np.mean(home_possession):.1f}%")
    print(f"  Events: {np.mean(event_counts):.1f}")


def validate_simulation_output(results: List[Dict[str, Any]], verbose: bool = True) -> bool:
    """
    Validate simulation output against the engine's structural guarantees.

    Each fixture is re-simulated from its seed to confirm the fingerprint.

    Returns:
        bool: True if every check passed for every match
    """
    if verbose:
        print("\n=== QUALITY VALIDATION ===")

    all_passed = True
    for r in results:
        result = r["result"]
        report = result.match_report
        problems = MatchEventLogger(result).validate()

        goal_events = sum(1 for event in result.event_log if event.event_type is EventType.GOAL)
        if report.total_goals != goal_events:
            problems.append(f"Score {report.home_score}-{report.away_score} does not match {goal_events} goal events")

        for side in (report.possession.home, report.possession.away):
            if not 0 <= side <= 100:
                problems.append(f"Possession percentage {side} out of range")

        replay = MatchEngine(r["home_team"], r["away_team"]).simulate(r["fixture_id"], r["seed"])
        if replay.fingerprint() != r["fingerprint"]:
            problems.append("Replay fingerprint differs from original run")

        if problems:
            all_passed = False
            if verbose:
                print(f"✗ {r['fixture_id']}:")
                for problem in problems:
                    print(f"    {problem}")
        elif verbose:
            print(f"✓ {r['fixture_id']} passed all checks")

    return all_passed


def seed_argument(value: str) -> int:
    """argparse type for decimal or hexadecimal seeds."""
    try:
        return parse_seed(value)
    except InvalidSeedError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Seeded Football Match Simulation')
    parser.add_argument('--fixture-id', type=str, default='fixture-1', help='Fixture identifier')
    parser.add_argument('--seed', type=seed_argument, default=42, help='Fixture seed (decimal or 0x-prefixed hex)')
    parser.add_argument('--matches', type=int, default=1, help='Number of matches to simulate')
    parser.add_argument('--output-dir', type=str, default='logs', help='Output directory for logs')
    parser.add_argument('--export', choices=EXPORT_FORMATS, default='none', help='Event log export format')
    parser.add_argument('--quiet', action='store_true', help='Suppress detailed output')
    parser.add_argument('--validate', action='store_true', help='Run output validation')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.matches < 1:
        print("Error: --matches must be at least 1")
        return 2

    try:
        results = simulate_matches(
            n_matches=args.matches,
            seed=args.seed,
            fixture_id=args.fixture_id,
            out_dir=args.output_dir,
            export=args.export,
            verbose=not args.quiet
        )

        if args.validate and not validate_simulation_output(results, verbose=not args.quiet):
            return 1

        if not args.quiet:
            print(f"\nSimulation completed successfully!")
            if args.export != 'none':
                print(f"Logs saved to: {os.path.abspath(args.output_dir)}")

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except SimulationError as e:
        print(f"Error during simulation: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
