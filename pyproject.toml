[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fuelindex"
version = "0.1.0"
description = "Command-line orchestrator for scaffolding, building, deploying and managing Fuel indexers"
requires-python = ">=3.11"
keywords = ["indexer", "fuel", "wasm", "cli", "scaffolding", "deploy", "cargo"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "requests",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
forc-index = "fuelindex.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fuelindex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py311"
