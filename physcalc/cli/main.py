"""
Command-line interface for the unit-aware calculator.

Usage:
    python -m physcalc eval EQUATION [EQUATION ...] [--sig-figs 6] [--json] [--latex]
    python -m physcalc run FILE [--output results.json] [--json]
    python -m physcalc units
    python -m physcalc constants
    python -m physcalc serve [--port 8000]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from physcalc import __version__
from physcalc.config import load_settings
from physcalc.context import default_context, load_context
from physcalc.models.outputs import EvaluateResponse
from physcalc.physics.registry import NON_SI_UNITS, PREFIXES
from physcalc.solver.equation_set import EquationSet


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="physcalc",
        description="Unit-aware expression calculator with exact decimal arithmetic.",
    )
    parser.add_argument("--version", action="version", version=f"physcalc {__version__}")
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a JSON settings file (default: $PHYSCALC_CONFIG)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # eval command
    eval_parser = subparsers.add_parser(
        "eval",
        help="Evaluate equations given on the command line",
    )
    eval_parser.add_argument(
        "equations",
        nargs="+",
        help="Equations, e.g. 'x = 5m' 'y = x + 3m'",
    )
    _add_output_options(eval_parser)

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Evaluate an equation file (one equation per line)",
    )
    run_parser.add_argument(
        "file",
        type=Path,
        help="Path to a UTF-8 equation file",
    )
    run_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON results (prints to stdout if not specified)",
    )
    _add_output_options(run_parser)

    # units command
    subparsers.add_parser(
        "units",
        help="List unit symbols and prefixes",
    )

    # constants command
    subparsers.add_parser(
        "constants",
        help="List physical constants usable through con(...)",
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

    return parser


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--sig-figs", "-s",
        type=int,
        default=None,
        help="Significant figures in results (default: from settings, 6)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--latex",
        action="store_true",
        help="Print LaTeX next to each result",
    )


def _build_set(args: argparse.Namespace, lines: list[str]) -> EquationSet:
    settings = args.settings
    context = load_context(settings.data_dir) if settings.data_dir else default_context()
    sig_figs = args.sig_figs or settings.sig_figs
    return EquationSet(lines, context=context, sig_figs=sig_figs)


def _report(args: argparse.Namespace, equation_set: EquationSet, output: Optional[Path] = None) -> int:
    results = equation_set.evaluate()
    response = EvaluateResponse(
        results=results,
        variables={
            name: value.to_string(equation_set.sig_figs)
            for name, value in equation_set.variables.items()
        },
    )

    if args.json or output:
        output_json = response.model_dump_json(indent=2)
        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(output_json)
            print(f"Results saved to {output}", file=sys.stderr)
        else:
            print(output_json)
    else:
        for result in results:
            if result.ok:
                line = f"{result.equation}  =>  {result.value}"
                if args.latex:
                    line += f"    [{result.latex} = {result.value_latex}]"
                print(line)
            else:
                print(f"{result.equation}  =>  {result.error.kind}: {result.error.message}")

    failed = len(response.failed)
    if failed:
        print(f"\n{failed} of {len(results)} equations failed", file=sys.stderr)
        return 1
    return 0


def cmd_eval(args: argparse.Namespace) -> int:
    """Evaluate equations from the command line."""
    return _report(args, _build_set(args, args.equations))


def cmd_run(args: argparse.Namespace) -> int:
    """Evaluate an equation file."""
    try:
        equation_set = _build_set(args, [])
        equation_set.load(args.file)
    except FileNotFoundError:
        print(f"Error: Equation file not found: {args.file}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: {args.file} is not valid UTF-8: {e}", file=sys.stderr)
        return 1

    print(f"Evaluating {len(equation_set)} lines from {args.file}", file=sys.stderr)
    return _report(args, equation_set, args.output)


def cmd_units(args: argparse.Namespace) -> int:
    """List unit symbols and prefixes."""
    registry = default_context().registry
    print("Units:")
    for symbol in registry.unit_symbols():
        unit = registry.lookup(symbol)
        description = NON_SI_UNITS[symbol][2] if symbol in NON_SI_UNITS else "SI"
        print(f"  {symbol:<5} {unit.to_string():<24} {description}")
    print("\nPrefixes:")
    for symbol, power in PREFIXES.items():
        print(f"  {symbol:<3} 1e{power}")
    return 0


def cmd_constants(args: argparse.Namespace) -> int:
    """List physical constants."""
    registry = default_context().registry
    for symbol, value in registry.constants.items():
        print(f"  {symbol:<6} {value.to_string(10)}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI web server."""
    import uvicorn

    print("\nStarting physcalc API", file=sys.stderr)
    print(f"API: http://{args.host}:{args.port}/", file=sys.stderr)
    print(f"Docs: http://{args.host}:{args.port}/docs", file=sys.stderr)
    print("\nPress Ctrl+C to stop\n", file=sys.stderr)

    uvicorn.run(
        "physcalc.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def cli(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    level = "DEBUG" if args.verbose else args.settings.log_level
    logging.basicConfig(level=getattr(logging, level), format="%(levelname)s %(name)s: %(message)s")

    commands = {
        "eval": cmd_eval,
        "run": cmd_run,
        "units": cmd_units,
        "constants": cmd_constants,
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
