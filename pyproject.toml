[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hotdash"
version = "0.2.0"
description = "Hot-reload engine for terminal dashboards: file loading, watching, state, events and error overlays"
requires-python = ">=3.10"
keywords = ["tui", "terminal", "dashboard", "hot-reload", "file-watching"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
]
dependencies = [
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hotdash"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
