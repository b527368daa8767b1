[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zbplug"
version = "0.1.0"
description = "Chat-bot plugin logic: emoji mixing, daily fortunes, card draws, music guessing and more"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["chat", "bot", "emoji", "fortune", "gacha", "music-quiz"]
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
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["zbplug"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
