[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lampctl"
version = "0.1.0"
description = "Profile scheduling, clock, temperature polling and JSON/HTTP control logic for a four-channel aquarium-style lamp"
requires-python = ">=3.10"
dependencies = []
keywords = ["lamp", "scheduler", "home-automation", "profiles", "websocket"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lampctl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
