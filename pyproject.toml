[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weddingphoto"
version = "1.0.0"
description = "HTTP backend for collecting and browsing wedding photos uploaded by guests"
requires-python = ">=3.10"
keywords = ["photos", "upload", "gallery", "wedding", "flask", "redis"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "redis",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
weddingphoto = "weddingphoto.app:main"

[tool.hatch.build.targets.wheel]
packages = ["weddingphoto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
