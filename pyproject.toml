[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "northernlights"
version = "0.1.0"
description = "A small simulated trading engine: OHLCV ingestion, indicators, sentiment, regime detection, position sizing and mock order execution."
requires-python = ">=3.11"
dependencies = []
keywords = [
    "trading",
    "simulation",
    "ohlcv",
    "indicators",
    "market-regime",
    "position-sizing",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
northernlights = "northernlights.orchestrator:main"

[tool.hatch.build.targets.wheel]
packages = ["northernlights"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
