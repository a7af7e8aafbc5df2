[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "leafcore"
version = "0.1.0"
description = "Text-editor core: charset and line-ending detection, caseless multi-line search, file loading and saving, and print pagination."
requires-python = ">=3.10"
dependencies = []
keywords = ["text editor", "charset detection", "line endings", "search", "pagination"]
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
    "Topic :: Text Editors",
    "Topic :: Text Processing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["leafcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
