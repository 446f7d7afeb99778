[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "miniweb"
version = "0.1.0"
description = "A small threaded HTTP server: a static file server and a tiny routed JSON API framework"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "static files", "router", "json", "api"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
miniweb-static = "miniweb.static_server:main"
miniweb-api = "miniweb.example_app:main"

[tool.hatch.build.targets.wheel]
packages = ["miniweb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
