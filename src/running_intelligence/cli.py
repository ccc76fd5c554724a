#!/usr/bin/env python3
"""
Running intelligence CLI.

Analytics over a runner's activity history: training load, race
predictions, running personality and today's plan.

Usage:
    runintel analyze runs.json                 # Full intelligence summary
    runintel analyze runs.json --today 2026-03-15 --json
    runintel dna RD-43524                      # Decode a DNA code
    runintel battle RD-43524 RD-25342          # Compare two runners
    runintel codex --archetype "Speed Demon"   # Browse the DNA codex
"""

import argparse
import json
import logging
import sys
from datetime import date
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import get_settings
from .engine import compute_intelligence
from .exceptions import InvalidCodeError, RunDataError, RunIntelligenceError
from .loader import load_runs
from .models.intelligence import IntelligenceData
from .models.load import LoadZone
from .models.personality import TRAIT_ORDER, RunningPersonality
from .models.plan import ScenarioType
from .personality import compare_dna, decode_dna, generate_codex, inner_battle

logger = logging.getLogger(__name__)

console = Console()


def get_zone_color(zone: LoadZone) -> str:
    """Get rich color for a training load zone."""
    colors = {
        LoadZone.INSUFFICIENT_DATA: "dim",
        LoadZone.DETRAINING: "white",
        LoadZone.RECOVERY: "blue",
        LoadZone.OPTIMAL: "green",
        LoadZone.OVERREACHING: "yellow",
        LoadZone.DANGER: "red",
    }
    return colors.get(zone, "white")


def get_scenario_color(scenario_type: ScenarioType) -> str:
    colors = {
        ScenarioType.BEST: "green",
        ScenarioType.GOOD: "blue",
        ScenarioType.CAUTION: "yellow",
        ScenarioType.AVOID: "red",
    }
    return colors.get(scenario_type, "white")


def score_bar(score: int) -> str:
    return "#" * score + "." * (5 - score)


def parse_today(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def print_personality(personality: RunningPersonality) -> None:
    table = Table(title=f"{personality.type} ({personality.code})", box=box.ROUNDED)
    table.add_column("Trait", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("")
    for trait in TRAIT_ORDER:
        score = getattr(personality.scores, trait)
        table.add_row(trait.title(), str(score), score_bar(score))
    console.print(table)
    console.print(personality.description)
    console.print(f"Top {100 - personality.percentile}% of runners (percentile {personality.percentile})")


def render_intelligence(intel: IntelligenceData) -> None:
    """Print the intelligence summary as rich tables."""
    console.print()
    console.print(Panel(
        f"[bold]{intel.total_runs} runs[/bold], {intel.total_km:.1f} km lifetime\n{intel.date_range}",
        title="Running Intelligence",
        box=box.ROUNDED,
    ))

    load = intel.training_load
    color = get_zone_color(load.zone)
    console.print(
        f"Training load: [{color}]{load.zone_label}[/{color}] "
        f"(ACWR {load.ratio:.2f}, acute {load.acute:.1f} km, chronic {load.chronic:.1f} km/week)"
    )
    console.print()

    plan = intel.todays_plan
    table = Table(title=f"Today: {plan.headline}", box=box.ROUNDED)
    table.add_column("Scenario", style="cyan")
    table.add_column("Distance", justify="right")
    table.add_column("Pace", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("ACWR after", justify="right")
    table.add_column("Fit")
    for scenario in plan.scenarios:
        fit_color = get_scenario_color(scenario.type)
        marker = " *" if scenario == plan.recommended else ""
        table.add_row(
            scenario.label + marker,
            scenario.distance,
            scenario.pace,
            scenario.duration,
            f"{scenario.projected_ratio:.2f}",
            f"[{fit_color}]{scenario.type.value}[/{fit_color}]",
        )
    console.print(table)
    console.print(
        f"Safe max {plan.safe_max_km:.1f} km, danger above {plan.danger_km:.1f} km. "
        f"Easy pace {plan.easy_pace}, tempo pace {plan.tempo_pace}."
    )
    console.print(f"Last run: {plan.last_run_summary}")
    console.print()

    if intel.race_predictions:
        table = Table(title="Race Predictions", box=box.ROUNDED)
        table.add_column("Race", style="cyan")
        table.add_column("Time", justify="right")
        table.add_column("Pace", justify="right")
        table.add_column("Based on", justify="right")
        for prediction in intel.race_predictions:
            table.add_row(
                prediction.label,
                prediction.time,
                prediction.pace,
                f"{prediction.base_distance_km:.1f} km on {prediction.base_date}",
            )
        console.print(table)
    else:
        console.print("[dim]No race predictions: no run of 3 km or more in the last 90 days.[/dim]")
    console.print()

    print_personality(intel.personality)
    console.print()

    recovery = intel.recovery
    if recovery.insufficient_data:
        console.print("[dim]Recovery: not enough runs yet.[/dim]")
    else:
        console.print(
            f"Recovery: {recovery.avg_rest_days:.1f} rest days on average, "
            f"{recovery.avg_rest_after_hard:.1f} after hard runs, "
            f"longest streak {recovery.longest_streak} days, longest break {recovery.longest_rest} days"
        )

    if intel.milestones or intel.run_milestones:
        table = Table(title="Milestones", box=box.SIMPLE)
        table.add_column("Goal", style="cyan")
        table.add_column("Progress", justify="right")
        table.add_column("Remaining", justify="right")
        table.add_column("ETA", justify="right")
        for milestone in intel.milestones:
            table.add_row(
                milestone.label,
                f"{milestone.progress}%",
                f"{milestone.remaining:.1f} km",
                milestone.estimated_label,
            )
        for milestone in intel.run_milestones:
            table.add_row(
                milestone.label,
                f"{milestone.progress}%",
                f"{int(milestone.remaining)} runs",
                milestone.estimated_label,
            )
        console.print(table)

    if intel.coach_advice:
        console.print(Panel("\n".join(f"- {line}" for line in intel.coach_advice), title="Coach", box=box.ROUNDED))
    console.print()


def cmd_analyze(args) -> int:
    """Compute and show the intelligence for a run file."""
    settings = get_settings()
    path = args.file or settings.default_runs_file
    if path is None:
        raise RunDataError("No run file given and RUNINTEL_DEFAULT_RUNS_FILE is not set")

    runs, total_km = load_runs(path)
    today = args.today or date.today()
    intel = compute_intelligence(runs, total_km, today)

    if args.json:
        print(json.dumps(intel.to_dict(), indent=settings.json_indent, ensure_ascii=False))
    else:
        render_intelligence(intel)
    return 0


def cmd_dna(args) -> int:
    """Decode a DNA code."""
    personality = decode_dna(args.code)
    if personality is None:
        raise InvalidCodeError(args.code)

    if args.json:
        print(json.dumps(personality.to_dict(), indent=get_settings().json_indent))
        return 0

    console.print()
    print_personality(personality)
    battle = inner_battle(personality.scores)
    console.print(
        f"Strongest: [green]{battle.strongest}[/green], weakest: [red]{battle.weakest}[/red]. "
        f"This week's challenge: {battle.challenge}"
    )
    console.print()
    return 0


def cmd_battle(args) -> int:
    """Compare two DNA codes head to head."""
    for code in (args.code1, args.code2):
        if decode_dna(code) is None:
            raise InvalidCodeError(code)
    result = compare_dna(args.code1, args.code2)

    if args.json:
        print(json.dumps(result.to_dict(), indent=get_settings().json_indent))
        return 0

    console.print()
    table = Table(title="DNA Battle", box=box.ROUNDED)
    table.add_column("Trait", style="cyan")
    table.add_column(f"{result.athlete1.code}\n{result.athlete1.type}", justify="center")
    table.add_column(f"{result.athlete2.code}\n{result.athlete2.type}", justify="center")
    for trait in TRAIT_ORDER:
        a = getattr(result.athlete1.scores, trait)
        b = getattr(result.athlete2.scores, trait)
        table.add_row(
            trait.title(),
            f"[bold green]{a}[/bold green]" if a > b else str(a),
            f"[bold green]{b}[/bold green]" if b > a else str(b),
        )
    console.print(table)

    names = {0: "Draw", 1: result.athlete1.code, 2: result.athlete2.code}
    for race, winner in result.predicted_winner.items():
        console.print(f"  {race:>4}: {names[winner]}")
    console.print()
    return 0


def cmd_codex(args) -> int:
    """List archetype groups of the DNA codex."""
    groups = generate_codex()
    if args.archetype:
        wanted = args.archetype.lower()
        groups = tuple(g for g in groups if wanted in g.type.lower())
        if not groups:
            console.print(f"[yellow]No archetype matches {args.archetype!r}.[/yellow]")
            return 1

    table = Table(title="DNA Codex", box=box.ROUNDED)
    table.add_column("Archetype", style="cyan")
    table.add_column("Codes", justify="right")
    table.add_column("Percentile", justify="right")
    table.add_column("Examples")
    for group in groups:
        table.add_row(
            group.type,
            str(group.count),
            f"{group.min_percentile}-{group.max_percentile}",
            ", ".join(group.codes[:3]),
        )
    console.print(table)

    if args.archetype and len(groups) == 1:
        console.print(groups[0].description)
        console.print(", ".join(groups[0].codes))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runintel",
        description="Running intelligence: training load, race predictions and running personality",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Analyze command
    analyze_p = subparsers.add_parser("analyze", help="Analyze a run history file")
    analyze_p.add_argument("file", nargs="?", help="JSON file with runs (defaults to RUNINTEL_DEFAULT_RUNS_FILE)")
    analyze_p.add_argument("--today", type=parse_today, help="Anchor date YYYY-MM-DD (default: today)")
    analyze_p.add_argument("--json", action="store_true", help="Print the camelCase JSON payload")
    analyze_p.set_defaults(func=cmd_analyze)

    # DNA command
    dna_p = subparsers.add_parser("dna", help="Decode a DNA code")
    dna_p.add_argument("code", help="DNA code, e.g. RD-43524")
    dna_p.add_argument("--json", action="store_true", help="Print JSON")
    dna_p.set_defaults(func=cmd_dna)

    # Battle command
    battle_p = subparsers.add_parser("battle", help="Compare two DNA codes")
    battle_p.add_argument("code1")
    battle_p.add_argument("code2")
    battle_p.add_argument("--json", action="store_true", help="Print JSON")
    battle_p.set_defaults(func=cmd_battle)

    # Codex command
    codex_p = subparsers.add_parser("codex", help="Browse all DNA codes by archetype")
    codex_p.add_argument("--archetype", "-a", help="Show only archetypes whose name contains this text")
    codex_p.set_defaults(func=cmd_codex)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except RunIntelligenceError as e:
        logger.debug(repr(e))
        console.print(f"[red]Error: {e.message}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
