[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskcron"
version = "0.1.0"
description = "A small persistent task scheduler that runs shell commands with retries and backoff, backed by SQLite"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduler", "cron", "tasks", "sqlite", "retry", "backoff"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
taskcron = "taskcron.cli:main"
taskcron-import = "taskcron.importer:main"

[tool.hatch.build.targets.wheel]
packages = ["taskcron"]

[tool.pytest.ini_options]
addopts = "-ra"
