[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ssbpack"
version = "0.1.0"
description = "Bit-packing and delta bit-packing encoders for Star Schema Benchmark integer columns, with single-value decoding"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "compression",
    "bit-packing",
    "frame-of-reference",
    "delta-encoding",
    "columnar",
    "star-schema-benchmark",
]
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
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ssb-binpack = "ssbpack.binpack:main"
ssb-deltabinpack = "ssbpack.deltabinpack:main"
ssb-testelem-bin = "ssbpack.decode:main_bin"
ssb-testelem-dbin = "ssbpack.decode:main_dbin"

[tool.hatch.build.targets.wheel]
packages = ["ssbpack"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
