[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "martiallang"
version = "0.1.0"
description = "Tokenize, validate and graph martial arts systems described in the Martial DSL"
requires-python = ">=3.10"
dependencies = []
keywords = ["dsl", "martial-arts", "lexer", "validation", "graph", "graphviz"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["martiallang"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
