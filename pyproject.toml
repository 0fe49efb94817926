[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "evoart"
version = "0.1.0"
description = "Evolve an approximation of an image from semi-transparent circles, triangles and squares with a genetic algorithm"
requires-python = ">=3.10"
keywords = ["genetic algorithm", "evolutionary art", "image approximation", "rasterizer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Artistic Software",
]
dependencies = [
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
evoart = "evoart.app:main"

[tool.hatch.build.targets.wheel]
packages = ["evoart"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
