[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wfnet"
version = "0.1.0"
description = "Petri-net style workflows: places, transitions, guards, events, persistence and Mermaid diagrams"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "workflow",
    "state machine",
    "petri net",
    "transitions",
    "mermaid",
    "approval",
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

[project.scripts]
wfnet-simple-flow = "wfnet.examples.simple_flow:main"
wfnet-document-approval = "wfnet.examples.document_approval:main"
wfnet-order-processing = "wfnet.examples.order_processing:main"

[tool.hatch.build.targets.wheel]
packages = ["wfnet"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
