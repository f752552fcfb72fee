[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dirbrowse"
version = "0.1.0"
description = "Browse a server's directory tree over a small TCP protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["directory", "browser", "tcp", "file-sharing", "socket"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: File Sharing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dirbrowse-server = "dirbrowse.server:main"
dirbrowse-client = "dirbrowse.client:main"

[tool.hatch.build.targets.wheel]
packages = ["dirbrowse"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
