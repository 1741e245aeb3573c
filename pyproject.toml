[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coffeemill"
version = "0.1.0"
description = "Trajectory handling and reweighting tools for molecular simulations"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["molecular dynamics", "trajectory", "xyz", "wham", "reweighting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Chemistry",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mill-traj = "coffeemill.traj:main"

[tool.hatch.build.targets.wheel]
packages = ["coffeemill"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
