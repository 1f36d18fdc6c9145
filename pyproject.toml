[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dbgkit"
version = "0.1.0"
description = "Debug output devices, tick timers, heap tracking, a command console and menus for small applications"
requires-python = ">=3.10"
keywords = ["debug", "logging", "console", "menu", "heap", "tracing"]
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
    "Topic :: Software Development :: Debuggers",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dbgkit-demo = "dbgkit.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["dbgkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
