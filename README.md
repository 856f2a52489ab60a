# emergencekit

Two small command-line tools and a library for spotting emergence patterns in
writing.

- **emergence-detector** reads one text file line by line and reports lines
  that suggest symbiotic combination ("A and B create more than...",
  "combination of A and B" with a word such as "together"), recursive loops
  ("feeds back into", "self-modifying", "loop", "cycle") and emergent causation
  ("enables", "gives rise to", "conditions for").
- **consciousness-archaeology** walks a directory of Markdown files and sums up
  artifact types, signatures, a phase summary and recursive depth.

## Installation

```
pip install .
```

Python 3.10 or later is required. There are no runtime dependencies.

## emergence-detector

```
emergence-detector [-json] [-v] [-threshold 0.7] <file>
```

- `-json` prints the source, a per-pattern summary and every detection as JSON.
- `-v` prints each pattern that matched, with its count, as analysis runs.
- `-threshold` sets the confidence needed for a detection to be listed in the
  text report (default 0.7).
- `-help` prints usage. Usage is also printed, with exit status 0, when not
  exactly one file is given.

The text report gives a summary of counts, the detections at or above the
threshold with their line, context (cut to 80 characters) and explanation, and
an overall assessment: strong, moderate or potential emergence, depending on
how many detections reach confidence 0.8, plus a note for any pattern seen more
than twice. Detections are ordered by descending confidence. A file that cannot
be opened gives an error message and exit status 1.

## consciousness-archaeology

```
consciousness-archaeology [-mode dig|signature|track|depth] [options] <directory>
```

- `dig` (default): survey every `.md` file. `-from TEXT` keeps only files
  whose path contains `TEXT`; `-to` is shown in the time range line but does
  not filter. Reports complexity growth between the oldest and newest file and
  a count of files with the recursive-loop pattern.
- `signature`: group artifacts by type and average their signature
  characteristics (complexity, emergence, recursion).
- `track -pattern "Recursive Loop"`: keep only artifacts carrying one pattern
  (`Symbiotic Combination`, `Recursive Loop` or `Emergent Causation`).
- `depth -depth 3`: rank artifacts by recursive depth, capped at `-depth`
  (default 3), deepest first.

Add `-json` for JSON output or `-v` for progress messages on standard error.
Files whose path contains `/_` (a directory or file name beginning with `_`)
are skipped. An unknown mode, or not exactly one directory, exits with
status 1.

## Library use

```python
from emergencekit.detector import Detector

result = Detector().analyze_text("Feedback feeds back into the design.", "note")
if result.has_emergence():
    for detection in result.high_confidence_detections(0.8):
        print(detection.pattern, detection.location, detection.confidence)
```

`Detector.analyze_file(path)` reads a file and analyses it the same way. The
individual detectors are in `emergencekit.patterns` (`detect_symbiosis`,
`detect_recursion`, `detect_emergent_causation`, `get_patterns`).

```python
from emergencekit.archaeology import Archaeologist

report = Archaeologist().map_recursive_depth("notes", 3)
print(report.to_dict()["insights"])
```

`Archaeologist` also offers `perform_dig`, `analyze_signatures`,
`track_pattern` and `discover_artifacts`. Text and JSON renderers are
`format_text` and `format_json` in `emergencekit.detector_cli` and
`emergencekit.archaeology_cli`.

## Limits

- consciousness-archaeology does not read the contents of the Markdown files.
  Artifact type, emergence score, patterns and recursive depth are all judged
  from words in each file's path; the only thing taken from the file itself is
  its modification time.
- There is no real time-range filtering: `-from` is a substring match on the
  path and `-to` is ignored.
- Evolution analysis always reports a single "Foundation" phase, no
  transitions and a fixed list of predictions.

## Running the tests

```
pip install .[test]
pytest
```