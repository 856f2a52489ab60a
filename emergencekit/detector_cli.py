"""Command-line front end that reports emergence patterns found in a file."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

from .detector import AnalysisResult, Detector
from .patterns import EMERGENT_CAUSATION, RECURSIVE_LOOP, SYMBIOTIC_COMBINATION

PROG = "emergence-detector"
DEFAULT_THRESHOLD = 0.7
STRONG_THRESHOLD = 0.8
CONTEXT_WIDTH = 80

_USAGE = f"""\
{PROG} - Identify emergence patterns in text

Usage: {PROG} [options] <file>

Options:
  -help
    \tShow help message
  -json
    \tOutput results as JSON
  -threshold float
    \tConfidence threshold (0.0-1.0) (default {DEFAULT_THRESHOLD})
  -v\tVerbose output

Patterns detected:
  - Symbiotic Combination: Elements creating more than their sum
  - Recursive Loop: Self-modifying cycles
  - Emergent Causation: Enabling conditions rather than direct cause
"""

# Characters that are escaped inside JSON strings for safe embedding in HTML.
_JSON_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def truncate(s: str, max_len: int) -> str:
    """Shorten ``s`` to ``max_len`` characters, ending with an ellipsis if cut."""
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."


def format_json(result: AnalysisResult) -> str:
    """Render a result as indented JSON, terminated by a newline."""
    payload = {
        "detections": [
            {
                "Pattern": d.pattern,
                "Location": d.location,
                "Context": d.context,
                "Confidence": d.confidence,
                "Explanation": d.explanation,
            }
            for d in result.detections
        ],
        "source": result.source,
        "summary": dict(sorted(result.summary.items())),
    }
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    for char, escaped in _JSON_ESCAPES:
        text = text.replace(char, escaped)
    return text + "\n"


def _format_summary(summary: dict[str, int]) -> list[str]:
    rows = [(f"  {name}:", count) for name, count in summary.items() if count > 0]
    if not rows:
        return []
    width = max(len(cell) for cell, _ in rows) + 2
    return [f"{cell.ljust(width)}{count} instances" for cell, count in rows]


def assess_emergence(result: AnalysisResult) -> str:
    """Describe the overall strength of emergence and notable pattern counts."""
    lines: list[str] = []
    total = len(result.detections)
    strong = len(result.high_confidence_detections(STRONG_THRESHOLD))

    if strong > 5:
        lines.append("✦ Strong emergence patterns detected")
        lines.append("  Multiple high-confidence patterns suggest complex emergent behavior")
    elif strong > 0:
        lines.append("◐ Moderate emergence patterns detected")
        lines.append("  Some clear patterns of emergence are present")
    elif total > 0:
        lines.append("○ Potential emergence patterns detected")
        lines.append("  Lower confidence indicators suggest possible emergent behavior")

    if result.summary.get(RECURSIVE_LOOP, 0) > 2:
        lines.append("  ⟳ Multiple recursive patterns suggest self-organizing behavior")
    if result.summary.get(SYMBIOTIC_COMBINATION, 0) > 2:
        lines.append("  ⊕ Symbiotic combinations indicate synergistic effects")
    if result.summary.get(EMERGENT_CAUSATION, 0) > 2:
        lines.append("  ⟹ Emergent causation suggests enabling conditions present")

    return "".join(line + "\n" for line in lines)


def format_text(result: AnalysisResult, threshold: float) -> str:
    """Render a human-readable report, listing detections at or above ``threshold``."""
    lines = [
        f"Emergence Analysis: {result.source}",
        "=====================================",
        "",
    ]
    if not result.has_emergence():
        lines.append("No emergence patterns detected.")
        return "\n".join(lines) + "\n"

    lines.append("Summary:")
    lines.extend(_format_summary(result.summary))
    lines.append("")

    high = result.high_confidence_detections(threshold)
    if high:
        lines.append(f"High Confidence Detections (>= {threshold:.1f}):")
        lines.append("=====================================")
        for number, detection in enumerate(high, start=1):
            lines.append("")
            lines.append(
                f"{number}. {detection.pattern} (confidence: {detection.confidence:.2f})"
            )
            lines.append(f"   Location: {detection.location}")
            lines.append(f"   Context: {truncate(detection.context, CONTEXT_WIDTH)}")
            lines.append(f"   Analysis: {detection.explanation}")

    lines.append("")
    lines.append("Emergence Assessment:")
    lines.append("====================")
    return "\n".join(lines) + "\n" + assess_emergence(result)


class _Parser(argparse.ArgumentParser):
    def print_usage(self, file=None) -> None:
        (file or sys.stderr).write(_USAGE)

    def print_help(self, file=None) -> None:
        (file or sys.stderr).write(_USAGE)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog=PROG, add_help=False)
    parser.add_argument("-json", "--json", dest="json", action="store_true")
    parser.add_argument("-v", "--v", dest="verbose", action="store_true")
    parser.add_argument(
        "-threshold", "--threshold", dest="threshold", type=float, default=DEFAULT_THRESHOLD
    )
    parser.add_argument("-help", "--help", "-h", dest="help", action="store_true")
    parser.add_argument("files", nargs="*")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Analyse the file named on the command line and print a report."""
    args = _build_parser().parse_args(argv)

    if args.help or len(args.files) != 1:
        sys.stderr.write(_USAGE)
        return 0

    filename = args.files[0]
    detector = Detector(verbose=args.verbose)
    try:
        result = detector.analyze_file(filename)
    except OSError as exc:
        sys.stderr.write(f"Error: error opening file: {exc}\n")
        return 1

    if args.json:
        sys.stdout.write(format_json(result))
    else:
        sys.stdout.write(format_text(result, args.threshold))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())