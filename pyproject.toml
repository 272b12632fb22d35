[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "landlord"
version = "0.1.0"
description = "A terminal property-trading board game for up to four players"
requires-python = ">=3.10"
dependencies = []
keywords = ["board game", "property trading", "terminal", "console game", "hot seat"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
landlord = "landlord.game:main"

[tool.setuptools.packages.find]
include = ["landlord*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
