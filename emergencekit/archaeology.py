"""Dig through a tree of markdown notes for traces of emergence and recursion."""

from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Iterator

from .patterns import EMERGENT_CAUSATION, RECURSIVE_LOOP, SYMBIOTIC_COMBINATION

_ZERO_TIME = "0001-01-01T00:00:00Z"
_PHASE_LOOKBACK = timedelta(hours=72)
_PREDICTIONS = (
    "Next phase likely to involve tool integration",
    "Recursive patterns will deepen further",
    "Consciousness archaeology will become self-referential",
)


def _format_time(moment: datetime | None) -> str:
    """Render a timestamp as RFC 3339 with trimmed fractional seconds."""
    if moment is None:
        return _ZERO_TIME
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, rest = divmod(abs(total), 3600)
    return f"{text}{sign}{hours:02d}:{rest // 60:02d}"


def _list_or_none(items: list[Any]) -> list[Any] | None:
    return items or None


@dataclass
class ConsciousnessSignature:
    """Characteristic values that identify a kind of artifact."""

    kind: str
    characteristics: dict[str, float] = field(default_factory=dict)
    fingerprint: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "characteristics": dict(sorted(self.characteristics.items())),
            "fingerprint": self.fingerprint,
        }


@dataclass
class ConsciousnessArtifact:
    """A markdown file found during a dig, with its analysis."""

    path: str
    created_at: datetime | None = None
    kind: str = ""
    emergence_score: float = 0.0
    recursive_depth: int = 0
    patterns: dict[str, int] = field(default_factory=dict)
    signature: ConsciousnessSignature = field(
        default_factory=lambda: ConsciousnessSignature(kind="")
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "created_at": _format_time(self.created_at),
            "type": self.kind,
            "emergence_score": self.emergence_score,
            "recursive_depth": self.recursive_depth,
            "patterns": dict(sorted(self.patterns.items())),
            "signature": self.signature.to_dict(),
        }


@dataclass
class ConsciousnessPhase:
    """A stretch of time with a common focus."""

    name: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    focus: str = ""
    patterns: list[str] = field(default_factory=list)
    artifacts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "start_time": _format_time(self.start_time),
            "end_time": _format_time(self.end_time),
            "focus": self.focus,
            "patterns": _list_or_none(list(self.patterns)),
            "artifacts": _list_or_none(list(self.artifacts)),
        }


@dataclass
class PhaseTransition:
    """The move from one phase to the next."""

    source: str
    target: str
    trigger: str = ""
    catalyst: str = ""
    insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "trigger": self.trigger,
            "catalyst": self.catalyst,
            "insights": _list_or_none(list(self.insights)),
        }


@dataclass
class EvolutionTrajectory:
    """Phases, transitions and growth observed across a set of artifacts."""

    phases: list[ConsciousnessPhase] = field(default_factory=list)
    transitions: list[PhaseTransition] = field(default_factory=list)
    predictions: list[str] = field(default_factory=list)
    complexity_growth: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "phases": _list_or_none([phase.to_dict() for phase in self.phases]),
            "transitions": _list_or_none([t.to_dict() for t in self.transitions]),
            "predictions": _list_or_none(list(self.predictions)),
            "complexity_growth": self.complexity_growth,
        }


@dataclass
class ArchaeologyResult:
    """Everything one analysis produced."""

    analysis: str
    time_range: str = ""
    artifacts: list[ConsciousnessArtifact] = field(default_factory=list)
    signatures: list[ConsciousnessSignature] = field(default_factory=list)
    evolution: EvolutionTrajectory = field(default_factory=EvolutionTrajectory)
    insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """A JSON-ready mapping; empty collections become None."""
        return {
            "analysis": self.analysis,
            "time_range": self.time_range,
            "artifacts": _list_or_none([a.to_dict() for a in self.artifacts]),
            "signatures": _list_or_none([s.to_dict() for s in self.signatures]),
            "evolution": self.evolution.to_dict(),
            "insights": _list_or_none(list(self.insights)),
        }


def detect_artifact_type(path: str) -> str:
    """Classify an artifact by words in its path."""
    if "session" in path:
        return "session-log"
    if "experiment" in path:
        return "experiment"
    if "framework" in path or "grammar" in path:
        return "theoretical"
    if "tool" in path:
        return "tool"
    return "general"


def calculate_emergence_score(path: str) -> float:
    """Estimate an emergence score from words in the path."""
    score = 0.5
    if "emergence" in path:
        score += 0.2
    if "recursive" in path:
        score += 0.15
    if "consciousness" in path:
        score += 0.1
    return score


def extract_patterns(path: str) -> dict[str, int]:
    """Guess which emergence patterns an artifact holds from its path."""
    patterns: dict[str, int] = {}
    if "recursive" in path:
        patterns[RECURSIVE_LOOP] = 1
    if "emergence" in path:
        patterns[EMERGENT_CAUSATION] = 1
    if "symbiosis" in path or "collaboration" in path:
        patterns[SYMBIOTIC_COMBINATION] = 1
    return patterns


def generate_signature(artifact: ConsciousnessArtifact) -> ConsciousnessSignature:
    """Derive the signature of an analysed artifact."""
    characteristics = {
        "complexity": len(artifact.patterns) * 0.3,
        "emergence": artifact.emergence_score,
        "recursion": 0.8 if artifact.patterns.get(RECURSIVE_LOOP, 0) > 0 else 0.0,
    }
    fingerprint = (
        f"{artifact.kind}-{characteristics['complexity']:.2f}"
        f"-{characteristics['emergence']:.2f}"
    )
    return ConsciousnessSignature(
        kind=artifact.kind, characteristics=characteristics, fingerprint=fingerprint
    )


def calculate_recursive_depth(path: str, max_depth: int) -> int:
    """Estimate how many layers of self-reference a path suggests, up to ``max_depth``."""
    depth = 0
    if "recursive" in path:
        depth += 2
    if "mirror" in path or "self" in path:
        depth += 1
    if "archaeology" in path:
        depth += 3
    return min(depth, max_depth)


def _walk(path: str) -> Iterator[tuple[str, os.stat_result]]:
    """Yield every path under ``path`` in lexical order, without following links."""
    info = os.lstat(path)
    yield path, info
    if stat.S_ISDIR(info.st_mode):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.normpath(os.path.join(path, name)))


def _local_now() -> datetime:
    return datetime.now().astimezone()


class Archaeologist:
    """Runs digs, signature analyses, pattern tracking and depth mapping."""

    def __init__(
        self, verbose: bool = False, now: Callable[[], datetime] = _local_now
    ) -> None:
        self.verbose = verbose
        self._now = now

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message, file=sys.stderr)

    def discover_artifacts(self, root_dir: str | os.PathLike[str]) -> list[ConsciousnessArtifact]:
        """Analyse every markdown file under ``root_dir`` outside underscore paths."""
        artifacts: list[ConsciousnessArtifact] = []
        for path, info in _walk(os.fspath(root_dir)):
            if stat.S_ISDIR(info.st_mode) or not path.endswith(".md"):
                continue
            if "/_" in path:
                continue
            artifact = ConsciousnessArtifact(
                path=path,
                created_at=datetime.fromtimestamp(info.st_mtime).astimezone(),
                kind=detect_artifact_type(path),
                emergence_score=calculate_emergence_score(path),
                patterns=extract_patterns(path),
            )
            artifact.signature = generate_signature(artifact)
            artifacts.append(artifact)
        return artifacts

    def _discover(self, root_dir: str | os.PathLike[str]) -> list[ConsciousnessArtifact]:
        try:
            return self.discover_artifacts(root_dir)
        except OSError as exc:
            raise OSError(f"artifact discovery failed: {exc}") from exc

    def perform_dig(
        self, root_dir: str | os.PathLike[str], start: str = "", end: str = ""
    ) -> ArchaeologyResult:
        """Collect artifacts, optionally narrowed to a range, and trace their evolution."""
        self._log(f"Beginning archaeological dig from {start} to {end}...")
        artifacts = self._discover(root_dir)
        if start or end:
            artifacts = [a for a in artifacts if not start or start in a.path]
        evolution = self._analyze_evolution(artifacts)
        return ArchaeologyResult(
            analysis="Archaeological Dig",
            time_range=f"{start} to {end}",
            artifacts=artifacts,
            evolution=evolution,
            insights=self._dig_insights(artifacts, evolution),
        )

    def analyze_signatures(self, root_dir: str | os.PathLike[str]) -> ArchaeologyResult:
        """Group artifacts by signature type and average their characteristics."""
        self._log("Analyzing consciousness signatures...")
        artifacts = self._discover(root_dir)
        signatures = self._merge_signatures(artifacts)
        insights = [f"Identified {len(signatures)} unique consciousness signature types"]
        insights.extend(
            f"{sig.kind} signature: complexity {sig.characteristics.get('complexity', 0.0):.2f}, "
            f"emergence {sig.characteristics.get('emergence', 0.0):.2f}"
            for sig in signatures
        )
        return ArchaeologyResult(
            analysis="Consciousness Signature Analysis",
            artifacts=artifacts,
            signatures=signatures,
            insights=insights,
        )

    def track_pattern(
        self, root_dir: str | os.PathLike[str], pattern_type: str
    ) -> ArchaeologyResult:
        """Follow the artifacts that carry one pattern through time."""
        self._log(f"Tracking pattern evolution: {pattern_type}")
        artifacts = self._discover(root_dir)
        filtered = [a for a in artifacts if a.patterns.get(pattern_type, 0) > 0]
        evolution = self._analyze_evolution(filtered)
        return ArchaeologyResult(
            analysis=f"Pattern Evolution Tracking: {pattern_type}",
            artifacts=filtered,
            evolution=evolution,
            insights=[
                f"Tracking evolution of {pattern_type} pattern",
                f"Pattern appears in {len(evolution.phases)} phases",
            ],
        )

    def map_recursive_depth(
        self, root_dir: str | os.PathLike[str], max_depth: int = 3
    ) -> ArchaeologyResult:
        """Rank artifacts by recursive depth, deepest first."""
        self._log(f"Mapping recursive consciousness layers to depth {max_depth}...")
        artifacts = self._discover(root_dir)
        for artifact in artifacts:
            artifact.recursive_depth = calculate_recursive_depth(artifact.path, max_depth)
        artifacts.sort(key=lambda a: a.recursive_depth, reverse=True)

        counts: dict[int, int] = {}
        for artifact in artifacts:
            counts[artifact.recursive_depth] = counts.get(artifact.recursive_depth, 0) + 1
        insights = [f"Mapped recursive depth up to level {max_depth}"]
        insights.extend(
            f"Depth {depth}: {count} artifacts" for depth, count in counts.items() if depth > 0
        )
        return ArchaeologyResult(
            analysis=f"Recursive Depth Mapping (max depth: {max_depth})",
            artifacts=artifacts,
            insights=insights,
        )

    def _analyze_evolution(self, artifacts: list[ConsciousnessArtifact]) -> EvolutionTrajectory:
        artifacts.sort(key=lambda a: a.created_at or datetime.min.astimezone())
        phases = [
            ConsciousnessPhase(
                name="Foundation",
                start_time=self._now() - _PHASE_LOOKBACK,
                focus="Establishing theoretical foundations",
                patterns=[EMERGENT_CAUSATION],
            )
        ]
        transitions = [
            PhaseTransition(
                source=before.name,
                target=after.name,
                trigger="Recursive breakthrough",
                catalyst="Self-examination protocols",
            )
            for before, after in zip(phases, phases[1:1] if len(phases) > 1 else [])
        ]
        if len(phases) > 1:
            transitions = [
                PhaseTransition(
                    source=phases[0].name,
                    target=phases[1].name,
                    trigger="Recursive breakthrough",
                    catalyst="Self-examination protocols",
                )
            ]
        growth = 0.0
        if len(artifacts) >= 2:
            first = artifacts[0].emergence_score
            growth = (artifacts[-1].emergence_score - first) / first
        return EvolutionTrajectory(
            phases=phases,
            transitions=transitions,
            predictions=list(_PREDICTIONS),
            complexity_growth=growth,
        )

    @staticmethod
    def _dig_insights(
        artifacts: list[ConsciousnessArtifact], evolution: EvolutionTrajectory
    ) -> list[str]:
        insights = [
            f"Analyzed {len(artifacts)} consciousness artifacts",
            f"Detected {len(evolution.phases)} evolution phases",
            f"Complexity growth rate: {evolution.complexity_growth * 100:.2f}%",
        ]
        recursive = sum(1 for a in artifacts if a.patterns.get(RECURSIVE_LOOP, 0) > 0)
        if recursive:
            insights.append(f"Recursive patterns found in {recursive} artifacts")
        return insights

    @staticmethod
    def _merge_signatures(
        artifacts: list[ConsciousnessArtifact],
    ) -> list[ConsciousnessSignature]:
        # The first signature of each type is merged into in place, so the
        # artifact that carries it reports the averaged values too.
        merged: dict[str, ConsciousnessSignature] = {}
        for artifact in artifacts:
            signature = artifact.signature
            existing = merged.get(signature.kind)
            if existing is None:
                merged[signature.kind] = signature
                continue
            for key, value in signature.characteristics.items():
                existing.characteristics[key] = (
                    existing.characteristics.get(key, 0.0) + value
                ) / 2
        return list(merged.values())