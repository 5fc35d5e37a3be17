[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wrrarbiter"
version = "0.1.0"
description = "Cycle-accurate model of a weighted round-robin arbiter with a testbench and VCD output"
requires-python = ">=3.10"
dependencies = []
keywords = ["arbiter", "round-robin", "hardware", "simulation", "vcd", "rtl"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wrrarbiter-tb = "wrrarbiter.testbench:main"

[tool.hatch.build.targets.wheel]
packages = ["wrrarbiter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
