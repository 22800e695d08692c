[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qpmu"
version = "0.1.0"
description = "Core of a plugin-driven application launcher, with a toolkit for writing its plugins"
requires-python = ">=3.11"
keywords = ["launcher", "plugins", "desktop", "hotkeys"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
    "Framework :: AsyncIO",
]
dependencies = [
    "tomli-w",
    "platformdirs",
    "aiosqlite",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["qpmu"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
