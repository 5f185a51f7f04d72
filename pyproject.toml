[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "milighthub"
version = "0.1.0"
description = "MiLight gateway logic: UDP v5/v6 protocol servers, discovery, transitions and bulb state types"
requires-python = ">=3.10"
dependencies = []
keywords = ["milight", "limitlessled", "udp", "gateway", "home-automation", "lighting"]
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
    "Topic :: Home Automation",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["milighthub"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
