[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "envirogen"
version = "3.0.1"
description = "Generate stacks of environment images for evolutionary simulations"
requires-python = ">=3.10"
keywords = [
    "environment",
    "simulation",
    "evolution",
    "image-stack",
    "artificial-life",
    "procedural-generation",
]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Life",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
envirogen = "envirogen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["envirogen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
