[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scopepost"
version = "0.1.0"
description = "Post-processing of digital oscilloscope samples: math channels, spectra, graphs, unit formatting and firmware image parsing"
requires-python = ">=3.10"
keywords = ["oscilloscope", "spectrum", "fft", "signal", "intel-hex", "ez-usb", "dso"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Information Analysis",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["scopepost"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
