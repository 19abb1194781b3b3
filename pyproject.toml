[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pgwire"
version = "0.1.0"
description = "Encoding and decoding of PostgreSQL wire protocol messages and text-format values"
requires-python = ">=3.10"
dependencies = []
keywords = ["postgresql", "postgres", "wire-protocol", "database", "codec"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pgwire"]

[tool.pytest.ini_options]
addopts = "-ra"
