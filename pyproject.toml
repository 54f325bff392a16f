[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "be20kit"
version = "2.1.0"
description = "Building blocks for bulk data scanning tools: timers, thread-safe containers, Unicode escaping, packet decoding, a thread pool and stop lists"
requires-python = ">=3.10"
dependencies = []
keywords = ["forensics", "unicode", "utf-16", "thread-pool", "stop-list", "packets"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["be20kit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
