[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coretypes"
version = "0.1.0"
description = "Core chain state types: big integers, signatures, sector and piece sizes, proof types and CBOR encoding."
requires-python = ">=3.10"
dependencies = []
keywords = ["cbor", "bigint", "signature", "sector", "proofs", "blockchain"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["coretypes"]

[tool.pytest.ini_options]
addopts = "-ra"
