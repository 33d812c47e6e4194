[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "latticeipc"
version = "0.1.0"
description = "Shared-memory SPSC ring channels and order-flow anomaly detectors for market data"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "ipc",
    "shared-memory",
    "ring-buffer",
    "spsc",
    "market-data",
    "anomaly-detection",
    "spoofing",
    "welford",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["latticeipc"]

[tool.pytest.ini_options]
addopts = "-ra"
