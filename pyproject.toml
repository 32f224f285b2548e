[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "marquee"
version = "1.0.0"
description = "Weather, time and settings for a scrolling LED marquee clock, with a small lenient JSON reader and writer"
requires-python = ">=3.10"
dependencies = []
keywords = ["marquee", "weather", "openweathermap", "timezonedb", "json", "clock"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["marquee"]

[tool.hatch.build.targets.sdist]
include = ["marquee", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
