[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "buildclock"
version = "1.0.0"
description = "Record how long your builds take and report statistics on them"
requires-python = ">=3.10"
dependencies = []
keywords = ["build", "timing", "profiling", "statistics", "build-time"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
buildclock = "buildclock.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["buildclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
