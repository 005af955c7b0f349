"""
Command-line interface for the deck load planner.

Usage:
    python -m deckload make-example [--output scenario.json]
    python -m deckload weight-balance --mission 1 [--input scenario.json]
    python -m deckload validate --mission 2 [--include-running]
    python -m deckload chart --operating-weight 80000 --cargo-weight 10000
    python -m deckload report --mission 1 [--json]
    python -m deckload serve [--port 8000]
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError

from deckload import __version__
from deckload.chart.cargo_chart import calculate_cargo_chart_y
from deckload.config.calibration import load_calibration
from deckload.config.settings import Settings, init_logging
from deckload.errors import DeckLoadError
from deckload.planner import LoadPlanner
from deckload.repository.loader import load_scenario, save_scenario
from deckload.repository.reference import build_reference_repository


def _add_data_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every command that reads a scenario."""
    parser.add_argument(
        "--input", "-i",
        type=Path,
        default=None,
        help="Path to scenario JSON file (default: built-in reference scenario)",
    )
    parser.add_argument(
        "--mission", "-m",
        type=int,
        required=True,
        help="Mission ID",
    )
    parser.add_argument(
        "--calibration", "-c",
        type=Path,
        default=None,
        help="Path to calibration JSON file (default: reference aircraft constants)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON output (prints to stdout if not specified)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="deckload",
        description="Deck Load Planner - weight-and-balance and cargo floor-load checks "
                    "for cargo aircraft missions.",
    )
    parser.add_argument("--version", action="version", version=f"deckload {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: DECKLOAD_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # make-example command
    example_parser = subparsers.add_parser(
        "make-example",
        help="Write the reference scenario to a JSON file",
    )
    example_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("scenario.json"),
        help="Output path for the scenario file (default: scenario.json)",
    )

    # weight-balance command
    wb_parser = subparsers.add_parser(
        "weight-balance",
        help="Compute gross weight, CG and MAC%% for a mission",
    )
    _add_data_arguments(wb_parser)

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check a mission's floor loads against compartment limits",
    )
    _add_data_arguments(validate_parser)
    validate_parser.add_argument(
        "--include-running",
        action="store_true",
        help="Also check running loads against treadway limits",
    )

    # chart command
    chart_parser = subparsers.add_parser(
        "chart",
        help="Read the cargo reference chart",
    )
    chart_parser.add_argument(
        "--operating-weight",
        type=float,
        required=True,
        help="Operating weight (lbs)",
    )
    chart_parser.add_argument(
        "--cargo-weight",
        type=float,
        required=True,
        help="Cargo weight (lbs)",
    )
    chart_parser.add_argument(
        "--calibration", "-c",
        type=Path,
        default=None,
        help="Path to calibration JSON file",
    )

    # report command
    report_parser = subparsers.add_parser(
        "report",
        help="Full mission report: weight and balance, MAC and floor checks",
    )
    _add_data_arguments(report_parser)
    report_parser.add_argument(
        "--include-running",
        action="store_true",
        help="Also check running loads against treadway limits",
    )
    report_parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of the readable summary",
    )
    report_parser.add_argument(
        "--failures-only",
        action="store_true",
        help="Only list failed floor-load checks in the readable summary",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the FastAPI web server",
    )
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    serve_parser.add_argument(
        "--input", "-i",
        type=Path,
        default=None,
        help="Scenario JSON file to serve (default: built-in reference scenario)",
    )

    return parser


def _apply_settings(args: argparse.Namespace, settings: Settings) -> None:
    """Fill scenario and calibration paths from the environment when no flag was given."""
    for attr, value in (("input", settings.scenario_path), ("calibration", settings.calibration_path)):
        if hasattr(args, attr) and getattr(args, attr) is None:
            setattr(args, attr, value)


def _build_planner(args: argparse.Namespace) -> LoadPlanner:
    repo = load_scenario(args.input) if args.input else build_reference_repository()
    calibration = load_calibration(args.calibration) if args.calibration else None
    return LoadPlanner(repo, calibration)


def _emit(result: BaseModel, output: Path | None) -> None:
    output_json = result.model_dump_json(indent=2)
    if output:
        with open(output, "w") as f:
            f.write(output_json)
        print(f"\nResults saved to {output}", file=sys.stderr)
    else:
        print(output_json)


def _report_error(args: argparse.Namespace, e: Exception) -> int:
    if isinstance(e, json.JSONDecodeError):
        source = getattr(args, "input", None) or args.calibration
        print(f"Error: Invalid JSON in {source}: {e}", file=sys.stderr)
    elif isinstance(e, ValidationError):
        print(f"Validation Error: {e}", file=sys.stderr)
    else:
        print(f"Error: {e}", file=sys.stderr)
    return 1


def cmd_make_example(args: argparse.Namespace) -> int:
    """Write the reference scenario to a JSON file."""
    save_scenario(build_reference_repository(), args.output)

    print(f"Created example scenario file: {args.output}")
    print("\nRun a mission report with:")
    print(f"  python -m deckload report --input {args.output} --mission 1")

    return 0


def cmd_weight_balance(args: argparse.Namespace) -> int:
    """Compute weight and balance for a mission."""
    try:
        planner = _build_planner(args)
        balance = asyncio.run(planner.weight_and_balance(args.mission))
    except (json.JSONDecodeError, FileNotFoundError, DeckLoadError, ValueError) as e:
        return _report_error(args, e)

    _emit(balance, args.output)
    print(
        f"\nMission {args.mission}: {balance.total_weight:,.0f} lbs | "
        f"CG {balance.cg:.2f} in | MAC {balance.mac_percent:.2f}%",
        file=sys.stderr,
    )
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate floor loads for a mission; exit status 2 when a check fails."""
    try:
        planner = _build_planner(args)
        results = asyncio.run(planner.validate_floor(args.mission, include_running=args.include_running))
    except (json.JSONDecodeError, FileNotFoundError, DeckLoadError, ValueError) as e:
        return _report_error(args, e)

    _emit(results, args.output)

    failures = results.failures
    print(f"\nFloor loads: {results.overall_status.value} "
          f"({len(results.results)} checks, {len(failures)} failed)", file=sys.stderr)
    for failure in failures:
        print(f"  - {failure.message}", file=sys.stderr)

    return 0 if not failures else 2


def cmd_chart(args: argparse.Namespace) -> int:
    """Read the cargo reference chart."""
    try:
        calibration = load_calibration(args.calibration) if args.calibration else None
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        return _report_error(args, e)

    if calibration is None:
        result = calculate_cargo_chart_y(args.operating_weight, args.cargo_weight)
    else:
        result = calculate_cargo_chart_y(args.operating_weight, args.cargo_weight, calibration.cargo_chart)

    print(result.model_dump_json(indent=2))
    if not result.is_within_bounds:
        print("\nWarning: point lies outside the chart range", file=sys.stderr)
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Print a full mission report."""
    from deckload.cli.readable_output import print_readable_report

    try:
        planner = _build_planner(args)
        report = asyncio.run(planner.build_report(args.mission, include_running=args.include_running))
    except (json.JSONDecodeError, FileNotFoundError, DeckLoadError, ValueError) as e:
        return _report_error(args, e)

    if args.json or args.output:
        _emit(report, args.output)
    if not args.json:
        print_readable_report(report.model_dump(mode="json"), failures_only=args.failures_only)

    return 0 if report.all_checks_passed else 2


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI web server."""
    import uvicorn

    if args.input:
        os.environ["DECKLOAD_SCENARIO"] = str(args.input)

    print("\nStarting Deck Load Planner API", file=sys.stderr)
    print(f"API: http://{args.host}:{args.port}/", file=sys.stderr)
    print(f"Docs: http://{args.host}:{args.port}/docs", file=sys.stderr)
    print("\nPress Ctrl+C to stop\n", file=sys.stderr)

    uvicorn.run(
        "deckload.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def cli(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.log_level:
        settings.log_level = args.log_level.upper()
    init_logging(settings)
    _apply_settings(args, settings)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "make-example": cmd_make_example,
        "weight-balance": cmd_weight_balance,
        "validate": cmd_validate,
        "chart": cmd_chart,
        "report": cmd_report,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


def main():
    """Console script entrypoint wrapper."""
    return cli()


if __name__ == "__main__":
    sys.exit(cli())
