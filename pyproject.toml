[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "despeck"
version = "0.1.0"
description = "Building blocks for non-local despeckling of SAR and InSAR images: tiling, covariance matrices, similarity measures and NL-SAR training statistics"
requires-python = ">=3.10"
keywords = ["sar", "insar", "despeckling", "nl-sar", "covariance", "image processing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["despeck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
