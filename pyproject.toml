[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termscreen"
version = "0.1.0"
description = "Termcap lookup, cursor-motion and scrolling strings, padding, tty modes and window buffers for character terminals"
requires-python = ">=3.10"
dependencies = []
keywords = ["termcap", "terminal", "tty", "cursor", "padding", "window"]
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
    "Topic :: Terminals",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["termscreen"]

[tool.pytest.ini_options]
addopts = "-ra"
