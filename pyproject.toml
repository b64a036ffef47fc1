[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cypherdriver"
version = "0.1.0"
description = "Client-side building blocks for a Cypher database client: routing, results, summaries, transactions and logging"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "database", "cypher", "driver", "routing"]
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
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cypherdriver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
