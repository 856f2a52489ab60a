[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "emergencekit"
version = "0.1.0"
description = "Detect emergence patterns in text and survey collections of Markdown notes"
requires-python = ">=3.10"
dependencies = []
keywords = ["emergence", "text analysis", "patterns", "markdown", "notes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Linguistic",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
emergence-detector = "emergencekit.detector_cli:main"
consciousness-archaeology = "emergencekit.archaeology_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["emergencekit"]

[tool.pytest.ini_options]
addopts = "-ra"
