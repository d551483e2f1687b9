[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "helixkit"
version = "0.1.0"
description = "Graph protocol types, a threaded HTTP gateway and a traversal code generator for a graph database"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "database", "gateway", "traversal", "code-generation"]
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
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["helixkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
