import pytest

from emergencekit.detector import AnalysisResult, Detector
from emergencekit.patterns import EmergencePattern, detect_recursion, get_patterns

SAMPLE = "\n".join(
    [
        "cats and dogs create more than either alone",
        "output feeds back into input in a loop",
        "trust enables growth and gives rise to order",
        "nothing to see here",
    ]
)


def test_summary_has_every_pattern_and_matching_counts():
    result = Detector().analyze_text(SAMPLE, "sample")
    assert result.source == "sample"
    assert set(result.summary) == {p.name for p in get_patterns()}
    for name, count in result.summary.items():
        assert count == sum(1 for d in result.detections if d.pattern == name)
    assert sum(result.summary.values()) == len(result.detections)


def test_detections_sorted_by_descending_confidence():
    result = Detector().analyze_text(SAMPLE)
    confidences = [d.confidence for d in result.detections]
    assert confidences == sorted(confidences, reverse=True)
    assert confidences[0] == 0.9


def test_no_emergence_in_neutral_text():
    result = Detector().analyze_text("a plain sentence", "plain")
    assert not result.has_emergence()
    assert result.detections == []
    assert all(count == 0 for count in result.summary.values())


def test_has_emergence():
    assert Detector().analyze_text("a loop").has_emergence()


def test_high_confidence_threshold_is_inclusive():
    result = Detector().analyze_text(SAMPLE)
    high = result.high_confidence_detections(0.85)
    assert high
    assert all(d.confidence >= 0.85 for d in high)
    assert any(d.confidence == 0.85 for d in high)
    assert len(result.high_confidence_detections(0.0)) == len(result.detections)
    assert result.high_confidence_detections(1.1) == []


def test_empty_result_helpers():
    result = AnalysisResult(source="x")
    assert not result.has_emergence()
    assert result.high_confidence_detections(0.5) == []


def test_analyze_file_matches_analyze_text(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text(SAMPLE, encoding="utf-8")
    detector = Detector()
    from_file = detector.analyze_file(path)
    from_text = detector.analyze_text(SAMPLE, str(path))
    assert from_file == from_text
    assert from_file.source == str(path)


def test_analyze_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Detector().analyze_file(tmp_path / "missing.md")


def test_verbose_reports_found_patterns(capsys):
    Detector(verbose=True).analyze_text("a loop")
    out = capsys.readouterr().out
    assert out == "Pattern 'Recursive Loop' found 1 instances\n"


def test_quiet_by_default(capsys):
    result = Detector().analyze_text(SAMPLE)
    assert result.has_emergence()
    assert capsys.readouterr().out == ""


def test_custom_pattern_set():
    only = EmergencePattern(name="Recursive Loop", description="d", detect=detect_recursion)
    result = Detector(patterns=[only]).analyze_text(SAMPLE)
    assert list(result.summary) == ["Recursive Loop"]
    assert {d.pattern for d in result.detections} == {"Recursive Loop"}