[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paperflip"
version = "0.1.0"
description = "EPUB reader core with pagination, page-flip preview state, ZIP browsing and zlib helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["epub", "ebook", "reader", "pagination", "zip", "gzip", "zlib", "checksum"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Viewers",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
paperflip = "paperflip.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["paperflip"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
