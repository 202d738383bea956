[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "huffpack"
version = "0.1.0"
description = "Huffman coding of text with a compact .huff file format and a command-line tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["huffman", "compression", "encoding", "bits"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
huffpack = "huffpack.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["huffpack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
