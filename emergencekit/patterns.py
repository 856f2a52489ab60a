"""Emergence patterns and the line-oriented detectors that find them in text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

SYMBIOTIC_COMBINATION = "Symbiotic Combination"
RECURSIVE_LOOP = "Recursive Loop"
EMERGENT_CAUSATION = "Emergent Causation"


@dataclass(frozen=True)
class Detection:
    """A single instance of an emergence pattern found in a line of text."""

    pattern: str
    location: str
    context: str
    confidence: float
    explanation: str


@dataclass(frozen=True)
class EmergencePattern:
    """A kind of emergence together with the function that detects it."""

    name: str
    description: str
    indicators: list[str] = field(default_factory=list)
    detect: Callable[[str], list[Detection]] = field(default=lambda text: [], compare=False)


def format_location(line: int) -> str:
    """Describe a 1-based line number as a location string."""
    return f"line:{line}"


def format_explanation(elem1: str, elem2: str, action: str) -> str:
    """Build an explanation naming two elements and what they do together."""
    return f"{elem1} and {elem2} {action}"


# Word classes match ASCII word characters only.
_SYMBIOSIS_PAIR = re.compile(
    r"(\w+)\s+and\s+(\w+)\s+(create|produce|yield|generate)\s+more than", re.ASCII
)
_COMBINATION_OF = re.compile(r"combination of\s+(\w+)\s+and\s+(\w+)", re.ASCII)
_SYNERGY = re.compile(r"(synerg|symbiotic|complementary|together)")
_SYMBIOSIS_INDICATORS = ("more than", "greater than the sum")

_FEEDBACK = re.compile(r"(\w+)\s+feeds?\s+back\s+into", re.ASCII)
_SELF_REFERENCE = re.compile(r"self[- ]?(modifying|referential|reinforcing|amplifying)")
_RECURSIVE_WORDS = re.compile(r"(recursive|iterative|loop|cycle)")

_ENABLES = re.compile(r"(\w+)\s+enables?\s+(\w+)", re.ASCII)
_EMERGENCE_PHRASE = re.compile(r"(gives?\s+rise\s+to|emerges?\s+from|makes?\s+possible)")
_CONDITION_PHRASE = re.compile(r"(conditions?\s+for|allows?\s+for|creates?\s+space\s+for)")


def _numbered_lines(text: str):
    return enumerate(text.split("\n"), start=1)


def detect_symbiosis(text: str) -> list[Detection]:
    """Find elements combining into more than their sum."""
    detections: list[Detection] = []

    def found(number: int, line: str, confidence: float, explanation: str) -> None:
        detections.append(
            Detection(
                SYMBIOTIC_COMBINATION,
                format_location(number),
                line,
                confidence,
                explanation,
            )
        )

    for number, line in _numbered_lines(text):
        if match := _SYMBIOSIS_PAIR.search(line):
            found(
                number,
                line,
                0.9,
                format_explanation(match[1], match[2], "create symbiotic value"),
            )

        match = _COMBINATION_OF.search(line)
        if match and _SYNERGY.search(line):
            found(
                number,
                line,
                0.8,
                format_explanation(match[1], match[2], "combine symbiotically"),
            )

        lowered = line.lower()
        if any(indicator in lowered for indicator in _SYMBIOSIS_INDICATORS):
            found(number, line, 0.7, "Indicates symbiotic emergence")

    return detections


def detect_recursion(text: str) -> list[Detection]:
    """Find feedback loops and self-modifying cycles."""
    detections: list[Detection] = []

    def found(number: int, line: str, confidence: float, explanation: str) -> None:
        detections.append(
            Detection(RECURSIVE_LOOP, format_location(number), line, confidence, explanation)
        )

    for number, line in _numbered_lines(text):
        if match := _FEEDBACK.search(line):
            found(number, line, 0.9, match[1] + " creates feedback loop")

        if _SELF_REFERENCE.search(line):
            found(number, line, 0.85, "Self-modifying behavior detected")

        if _RECURSIVE_WORDS.search(line.lower()):
            found(number, line, 0.7, "Recursive pattern indicated")

    return detections


def detect_emergent_causation(text: str) -> list[Detection]:
    """Find enabling conditions described in place of direct causes."""
    detections: list[Detection] = []

    def found(number: int, line: str, confidence: float, explanation: str) -> None:
        detections.append(
            Detection(
                EMERGENT_CAUSATION, format_location(number), line, confidence, explanation
            )
        )

    for number, line in _numbered_lines(text):
        if match := _ENABLES.search(line):
            found(number, line, 0.85, match[1] + " enables emergence of " + match[2])

        if _EMERGENCE_PHRASE.search(line):
            found(number, line, 0.9, "Emergent relationship identified")

        if _CONDITION_PHRASE.search(line):
            found(number, line, 0.75, "Enabling conditions present")

    return detections


def get_patterns() -> list[EmergencePattern]:
    """Return every emergence pattern that can be detected, in a fixed order."""
    return [
        EmergencePattern(
            name=SYMBIOTIC_COMBINATION,
            description="Elements combining to create more than their sum (A ⊕ B)",
            indicators=[
                "more than",
                "greater than the sum",
                "synergy",
                "combined effect",
                "together create",
            ],
            detect=detect_symbiosis,
        ),
        EmergencePattern(
            name=RECURSIVE_LOOP,
            description="Self-modifying cycles that create emergent behavior (⟳)",
            indicators=["feeds back", "recursive", "self-modifying", "iterative", "reinforcing"],
            detect=detect_recursion,
        ),
        EmergencePattern(
            name=EMERGENT_CAUSATION,
            description="Enabling conditions rather than direct causation (⟹)",
            indicators=[
                "enables",
                "gives rise to",
                "emerges from",
                "conditions for",
                "makes possible",
            ],
            detect=detect_emergent_causation,
        ),
    ]