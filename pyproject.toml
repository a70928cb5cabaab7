[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "poseidonhash"
version = "0.1.0"
description = "Poseidon hash over the BN256 scalar field, with iden3-style sponge domains and hash table row computation"
requires-python = ">=3.10"
dependencies = []
keywords = ["poseidon", "hash", "bn256", "bn254", "sponge", "iden3", "grain", "zero-knowledge"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["poseidonhash"]

[tool.pytest.ini_options]
addopts = "-ra"
