[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rkit"
version = "0.1.0"
description = "Small toolkit: SQL key/value storage, a delimited message codec, TCP and local-socket request helpers, wpa_cli control, and headless UI state models."
requires-python = ">=3.10"
dependencies = [
    "pymysql",
]
keywords = ["sqlite", "mysql", "tcp", "unix-socket", "ipc", "wpa_cli", "keyboard", "paging"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
