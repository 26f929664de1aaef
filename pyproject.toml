[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "goweb"
version = "0.0.1"
description = "Building blocks for a small web framework: path cleaning, response writing and rendering, access-log formatting, run modes and an application folder layout."
requires-python = ">=3.10"
keywords = ["web", "http", "render", "json", "yaml", "msgpack", "logging", "framework"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "jinja2",
    "msgpack",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["goweb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
