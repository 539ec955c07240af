[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "liveascii"
version = "0.1.0"
description = "Physics rig simulation, face-tracking packets, glyph shaders and popups for animating a character as ASCII art in a terminal"
requires-python = ">=3.10"
dependencies = []
keywords = ["ascii", "terminal", "physics", "face-tracking", "animation", "udp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["liveascii"]

[tool.pytest.ini_options]
addopts = "-ra"
