[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsonpatchkit"
version = "0.1.0"
description = "Apply JSON Patch (RFC 6902) documents to plain Python JSON values"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "json-patch", "rfc6902", "json-pointer", "patch"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jsonpatchkit"]

[tool.pytest.ini_options]
addopts = "-ra"
