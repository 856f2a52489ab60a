import json
import os
from datetime import datetime, timedelta, timezone

import pytest

from emergencekit.archaeology import (
    Archaeologist,
    ArchaeologyResult,
    ConsciousnessArtifact,
    calculate_emergence_score,
    calculate_recursive_depth,
    detect_artifact_type,
    extract_patterns,
    generate_signature,
)


def _make(root, relative, mtime=None, text="notes\n"):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("notes/session-1.md", "session-log"),
        ("notes/experiment-a.md", "experiment"),
        ("notes/framework.md", "theoretical"),
        ("notes/grammar.md", "theoretical"),
        ("notes/tool-ideas.md", "tool"),
        ("notes/plain.md", "general"),
        ("notes/session-experiment.md", "session-log"),
    ],
)
def test_detect_artifact_type(path, expected):
    assert detect_artifact_type(path) == expected


def test_emergence_score_grows_with_keywords():
    plain = calculate_emergence_score("plain.md")
    assert plain == 0.5
    single = calculate_emergence_score("emergence.md")
    combined = calculate_emergence_score("emergence-recursive-consciousness.md")
    assert plain < single < combined


def test_extract_patterns():
    found = extract_patterns("recursive-emergence-symbiosis.md")
    assert set(found) == {"Recursive Loop", "Emergent Causation", "Symbiotic Combination"}
    assert all(count == 1 for count in found.values())
    assert extract_patterns("plain.md") == {}
    assert set(extract_patterns("collaboration.md")) == {"Symbiotic Combination"}


def test_generate_signature_plain():
    artifact = ConsciousnessArtifact(path="plain.md", kind="general", emergence_score=0.5)
    signature = generate_signature(artifact)
    assert signature.kind == "general"
    assert signature.fingerprint == "general-0.00-0.50"
    assert signature.characteristics["recursion"] == 0.0
    assert signature.characteristics["emergence"] == artifact.emergence_score


def test_generate_signature_recursive():
    artifact = ConsciousnessArtifact(
        path="recursive.md",
        kind="general",
        emergence_score=calculate_emergence_score("recursive.md"),
        patterns=extract_patterns("recursive.md"),
    )
    signature = generate_signature(artifact)
    assert signature.characteristics["recursion"] == 0.8
    assert signature.characteristics["complexity"] > 0
    assert signature.fingerprint.startswith("general-")


def test_recursive_depth_is_capped():
    assert calculate_recursive_depth("plain.md", 5) == 0
    deep = "recursive-self-archaeology.md"
    assert calculate_recursive_depth(deep, 3) == 3
    uncapped = calculate_recursive_depth(deep, 100)
    assert 3 < uncapped < 100
    assert calculate_recursive_depth("mirror.md", 5) < calculate_recursive_depth(deep, 5)


def test_discover_artifacts_skips_underscore_and_non_markdown(tmp_path):
    _make(tmp_path, "a.md")
    _make(tmp_path, "b.txt")
    _make(tmp_path, "_hidden/c.md")
    _make(tmp_path, "sub/d.md")
    _make(tmp_path, "sub/_e.md")
    artifacts = Archaeologist().discover_artifacts(str(tmp_path))
    paths = {os.path.relpath(a.path, tmp_path) for a in artifacts}
    assert paths == {"a.md", os.path.join("sub", "d.md")}
    for artifact in artifacts:
        assert artifact.signature.kind == artifact.kind


def test_missing_root_raises(tmp_path):
    with pytest.raises(OSError, match="artifact discovery failed"):
        Archaeologist().perform_dig(str(tmp_path / "missing"))


def test_dig_sorts_by_time_and_reports(tmp_path):
    _make(tmp_path, "late.md", mtime=2_000_000)
    _make(tmp_path, "early-recursive.md", mtime=1_000_000)
    result = Archaeologist().perform_dig(str(tmp_path), "", "")
    assert result.analysis == "Archaeological Dig"
    assert result.time_range == " to "
    times = [a.created_at for a in result.artifacts]
    assert times == sorted(times)
    assert result.insights[0] == f"Analyzed {len(result.artifacts)} consciousness artifacts"
    assert "Recursive patterns found in 1 artifacts" in result.insights
    assert len(result.evolution.predictions) == 3


def test_dig_growth_sign_follows_time_order(tmp_path):
    _make(tmp_path, "old/plain.md", mtime=1_000_000)
    _make(tmp_path, "new/emergence.md", mtime=2_000_000)
    rising = Archaeologist().perform_dig(str(tmp_path))
    assert rising.evolution.complexity_growth > 0

    os.utime(tmp_path / "old/plain.md", (3_000_000, 3_000_000))
    falling = Archaeologist().perform_dig(str(tmp_path))
    assert falling.evolution.complexity_growth < 0
    assert any(line.startswith("Complexity growth rate:") for line in falling.insights)


def test_dig_filters_by_start(tmp_path):
    _make(tmp_path, "2024-notes.md")
    _make(tmp_path, "2023-notes.md")
    result = Archaeologist().perform_dig(str(tmp_path), "2024", "")
    assert [os.path.basename(a.path) for a in result.artifacts] == ["2024-notes.md"]
    assert result.time_range == "2024 to "


def test_dig_phase_starts_before_now(tmp_path):
    fixed = datetime(2030, 5, 1, 12, 0, tzinfo=timezone.utc)
    result = Archaeologist(now=lambda: fixed).perform_dig(str(tmp_path))
    phase = result.evolution.phases[0]
    assert phase.name == "Foundation"
    assert phase.start_time == fixed - timedelta(hours=72)
    assert phase.end_time is None
    assert result.evolution.transitions == []


def test_analyze_signatures_merges_types(tmp_path):
    _make(tmp_path, "a-plain.md")
    _make(tmp_path, "b-emergence.md")
    _make(tmp_path, "session.md")
    result = Archaeologist().analyze_signatures(str(tmp_path))
    kinds = {sig.kind for sig in result.signatures}
    assert kinds == {"general", "session-log"}
    assert result.insights[0] == "Identified 2 unique consciousness signature types"
    general = next(sig for sig in result.signatures if sig.kind == "general")
    low = calculate_emergence_score("a-plain.md")
    high = calculate_emergence_score("b-emergence.md")
    assert low < general.characteristics["emergence"] < high
    assert result.time_range == ""


def test_track_pattern_keeps_only_matching(tmp_path):
    _make(tmp_path, "recursive-one.md")
    _make(tmp_path, "plain.md")
    _make(tmp_path, "recursive-two.md")
    result = Archaeologist().track_pattern(str(tmp_path), "Recursive Loop")
    assert len(result.artifacts) == 2
    assert all(a.patterns["Recursive Loop"] > 0 for a in result.artifacts)
    assert result.analysis == "Pattern Evolution Tracking: Recursive Loop"
    assert result.insights[0] == "Tracking evolution of Recursive Loop pattern"


def test_map_recursive_depth_orders_descending(tmp_path):
    _make(tmp_path, "plain.md")
    _make(tmp_path, "recursive-archaeology.md")
    _make(tmp_path, "mirror.md")
    result = Archaeologist().map_recursive_depth(str(tmp_path), 2)
    depths = [a.recursive_depth for a in result.artifacts]
    assert depths == sorted(depths, reverse=True)
    assert max(depths) <= 2
    assert result.insights[0] == "Mapped recursive depth up to level 2"
    assert result.analysis == "Recursive Depth Mapping (max depth: 2)"


def test_verbose_logs_to_stderr(tmp_path, capsys):
    Archaeologist(verbose=True).perform_dig(str(tmp_path), "a", "b")
    assert "Beginning archaeological dig from a to b..." in capsys.readouterr().err


def test_to_dict_of_empty_dig(tmp_path):
    result = Archaeologist().perform_dig(str(tmp_path))
    data = result.to_dict()
    assert data["artifacts"] is None
    assert data["signatures"] is None
    assert data["evolution"]["transitions"] is None
    phase = data["evolution"]["phases"][0]
    assert phase["end_time"] == "0001-01-01T00:00:00Z"
    assert phase["artifacts"] is None
    assert json.loads(json.dumps(data)) == data


def test_to_dict_artifact_fields(tmp_path):
    _make(tmp_path, "recursive.md", mtime=1_500_000)
    data = Archaeologist().perform_dig(str(tmp_path)).to_dict()
    artifact = data["artifacts"][0]
    assert set(artifact) == {
        "path",
        "created_at",
        "type",
        "emergence_score",
        "recursive_depth",
        "patterns",
        "signature",
    }
    stamp = datetime.fromisoformat(artifact["created_at"].replace("Z", "+00:00"))
    assert stamp.timestamp() == 1_500_000
    assert artifact["patterns"] == {"Recursive Loop": 1}
    assert list(artifact["signature"]["characteristics"]) == sorted(
        artifact["signature"]["characteristics"]
    )


def test_default_result_to_dict():
    data = ArchaeologyResult(analysis="Consciousness Signature Analysis").to_dict()
    assert data["analysis"] == "Consciousness Signature Analysis"
    assert data["evolution"]["predictions"] is None
    assert data["evolution"]["complexity_growth"] == 0.0
    assert data["insights"] is None