[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blink_pairs"
version = "0.1.0"
description = "Bracket, string, comment and span pair matching for editor buffers across many languages"
requires-python = ">=3.10"
dependencies = []
keywords = ["brackets", "delimiters", "pairs", "editor", "parser", "highlighting"]
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
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blink_pairs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
