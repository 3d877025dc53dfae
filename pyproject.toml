[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oldkern"
version = "0.1.0"
description = "Formats, tables and bookkeeping of an early Unix-like kernel, with a boot image builder"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kernel",
    "a.out",
    "minix",
    "boot image",
    "paging",
    "vsprintf",
    "ctype",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels :: Linux",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oldkern-build = "oldkern.build:main"

[tool.hatch.build.targets.wheel]
packages = ["oldkern"]

[tool.pytest.ini_options]
addopts = "-ra"
