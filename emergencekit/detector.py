"""Run every emergence pattern over a text or a file and collect the results."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable

from .patterns import Detection, EmergencePattern, get_patterns


@dataclass
class AnalysisResult:
    """Detections found in one source, with a count per pattern name."""

    source: str
    detections: list[Detection] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)

    def has_emergence(self) -> bool:
        """True if any emergence pattern was detected."""
        return bool(self.detections)

    def high_confidence_detections(self, threshold: float) -> list[Detection]:
        """Detections whose confidence is at least ``threshold``."""
        return [d for d in self.detections if d.confidence >= threshold]


class Detector:
    """Applies a set of emergence patterns to text."""

    def __init__(
        self,
        verbose: bool = False,
        patterns: Iterable[EmergencePattern] | None = None,
    ) -> None:
        self.verbose = verbose
        self.patterns = list(get_patterns() if patterns is None else patterns)

    def analyze_file(self, filename: str | os.PathLike[str]) -> AnalysisResult:
        """Read a file and analyse its contents; OSError propagates on failure."""
        with open(filename, encoding="utf-8", errors="replace", newline="") as handle:
            content = handle.read()
        return self.analyze_text(content, os.fspath(filename))

    def analyze_text(self, text: str, source: str = "") -> AnalysisResult:
        """Analyse text, returning detections sorted by descending confidence."""
        result = AnalysisResult(source=source)
        for pattern in self.patterns:
            detections = pattern.detect(text)
            result.detections.extend(detections)
            result.summary[pattern.name] = len(detections)
            if self.verbose and detections:
                print(f"Pattern '{pattern.name}' found {len(detections)} instances")

        result.detections.sort(key=lambda d: d.confidence, reverse=True)
        return result