[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "backrefmatch"
version = "0.1.0"
description = "Whole-string regular expression matching with back-references, plus suffix array construction"
requires-python = ">=3.10"
dependencies = []
keywords = ["regex", "backreference", "nfa", "suffix-array", "sais"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
backrefmatch = "backrefmatch.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["backrefmatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
