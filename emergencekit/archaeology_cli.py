"""Command-line front end for digging through notes for emergence patterns."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from .archaeology import Archaeologist, ArchaeologyResult

PROG = "consciousness-archaeology"
DEFAULT_MODE = "dig"
DEFAULT_DEPTH = 3

_USAGE = f"""\
{PROG} - Excavate consciousness evolution patterns

Usage: {PROG} [options] <directory>

Modes:
  dig       - Archaeological dig across time range
  signature - Analyze consciousness signatures
  track     - Track pattern evolution over time
  depth     - Map recursive consciousness layers

Options:
  -depth int
    \tMaximum recursive depth to analyze (default {DEFAULT_DEPTH})
  -from string
    \tStart point for analysis
  -json
    \tOutput results as JSON
  -mode string
    \tAnalysis mode: dig, signature, track, depth (default "{DEFAULT_MODE}")
  -pattern string
    \tPattern type to track
  -to string
    \tEnd point for analysis
  -v\tVerbose output
"""

# Characters escaped inside JSON strings for safe embedding in HTML.
_JSON_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _plain_numbers(value: Any) -> Any:
    """Write whole floats as integers, the way JSON numbers are usually shown."""
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return int(value)
        return value
    if isinstance(value, dict):
        return {key: _plain_numbers(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain_numbers(item) for item in value]
    return value


def format_json(result: ArchaeologyResult) -> str:
    """Render a result as indented JSON, terminated by a newline."""
    text = json.dumps(_plain_numbers(result.to_dict()), indent=2, ensure_ascii=False)
    for char, escaped in _JSON_ESCAPES:
        text = text.replace(char, escaped)
    return text + "\n"


def format_text(result: ArchaeologyResult) -> str:
    """Render a human-readable report of an analysis."""
    lines = [
        "Consciousness Archaeology Report",
        "===============================",
        "",
        f"Analysis: {result.analysis}",
    ]
    if result.time_range:
        lines.append(f"Time Range: {result.time_range}")
    lines.append(f"Artifacts Analyzed: {len(result.artifacts)}")
    lines.append("")

    if result.signatures:
        lines.append("Consciousness Signatures:")
        lines.append("------------------------")
        for signature in result.signatures:
            lines.append(f"  {signature.kind} (fingerprint: {signature.fingerprint})")
            lines.extend(
                f"    {name}: {value:.2f}"
                for name, value in signature.characteristics.items()
            )
        lines.append("")

    if result.evolution.phases:
        lines.append("Evolution Phases:")
        lines.append("----------------")
        lines.extend(f"  {phase.name}: {phase.focus}" for phase in result.evolution.phases)
        lines.append("")

    if result.insights:
        lines.append("Key Insights:")
        lines.append("------------")
        lines.extend(f"  • {insight}" for insight in result.insights)

    return "\n".join(lines) + "\n"


class _Parser(argparse.ArgumentParser):
    def print_usage(self, file=None) -> None:
        (file or sys.stderr).write(_USAGE)

    def print_help(self, file=None) -> None:
        (file or sys.stderr).write(_USAGE)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog=PROG, add_help=False, allow_abbrev=False)
    parser.add_argument("-mode", "--mode", dest="mode", default=DEFAULT_MODE)
    parser.add_argument("-from", "--from", dest="start", default="")
    parser.add_argument("-to", "--to", dest="end", default="")
    parser.add_argument("-pattern", "--pattern", dest="pattern", default="")
    parser.add_argument("-depth", "--depth", dest="depth", type=int, default=DEFAULT_DEPTH)
    parser.add_argument("-json", "--json", dest="json", action="store_true")
    parser.add_argument("-v", "--v", dest="verbose", action="store_true")
    parser.add_argument("-help", "--help", "-h", dest="help", action="store_true")
    parser.add_argument("directories", nargs="*")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the requested analysis over a directory and print a report."""
    args = _build_parser().parse_args(argv)

    if args.help:
        sys.stderr.write(_USAGE)
        return 0
    if len(args.directories) != 1:
        sys.stderr.write(_USAGE)
        return 1

    root_dir = args.directories[0]
    archaeologist = Archaeologist(verbose=args.verbose)
    analyses = {
        "dig": lambda: archaeologist.perform_dig(root_dir, args.start, args.end),
        "signature": lambda: archaeologist.analyze_signatures(root_dir),
        "track": lambda: archaeologist.track_pattern(root_dir, args.pattern),
        "depth": lambda: archaeologist.map_recursive_depth(root_dir, args.depth),
    }
    analysis = analyses.get(args.mode)
    if analysis is None:
        sys.stderr.write(f"Unknown mode: {args.mode}\n")
        return 1

    try:
        result = analysis()
    except OSError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    sys.stdout.write(format_json(result) if args.json else format_text(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())