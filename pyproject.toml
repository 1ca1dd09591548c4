[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tdsvalues"
version = "0.1.0"
description = "Wire-level value types, conversions and result streams for the TDS database protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["tds", "sql-server", "mssql", "database", "protocol"]
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
packages = ["tdsvalues"]

[tool.pytest.ini_options]
addopts = "-ra"
