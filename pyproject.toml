[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rutterlayout"
version = "0.1.0"
description = "A box-constraint layout engine with incremental relayout, flex, stack and alignment layouts"
requires-python = ">=3.10"
dependencies = []
keywords = ["layout", "ui", "flex", "constraints", "stack"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rutterlayout"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
