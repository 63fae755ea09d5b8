[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "vehicle_models"
version = "0.1.0"
description = "Simple vehicle sub-system models and an emergency braking controller for cycle-based driving simulation"
requires-python = ">=3.10"
keywords = ["vehicle", "simulation", "powertrain", "brake", "aerodynamics", "AEB", "ACC"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["vehicle_models*"]

[tool.pytest.ini_options]
addopts = "-ra"
