[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atlaskit"
version = "2.0.0"
description = "Building blocks for API services: collection query operators, resource identifiers, error details, request IDs, request info and structured logging."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "api",
    "filtering",
    "pagination",
    "sorting",
    "field-selection",
    "request-id",
    "logging",
    "middleware",
]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["atlaskit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
