[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zuicore"
version = "0.1.0"
description = "Cooperative engine scheduler with signals and timers, plus stroke styles and a tile cache for zoomable user interfaces"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduler", "cooperative", "signals", "timers", "engine", "tile cache", "stroke", "zoomable ui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zuicore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
