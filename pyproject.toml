[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fenrisclient"
version = "0.1.0"
description = "Client side of a small remote file service: command prompt, request building and response formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["file transfer", "client", "remote filesystem", "terminal", "tui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fenrisclient"]

[tool.hatch.build.targets.sdist]
include = ["fenrisclient", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
