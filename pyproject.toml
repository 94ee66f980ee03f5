[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lager"
version = "0.1.0"
description = "Unidirectional data flow for interactive Python programs: stores, reducers, effects, reactive nodes, lenses and a time-travel debugger"
requires-python = ">=3.10"
dependencies = []
keywords = ["store", "reducer", "effects", "lenses", "unidirectional data flow", "state management", "time travel"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lager-counter = "lager.counter:main"

[tool.hatch.build.targets.wheel]
packages = ["lager"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
