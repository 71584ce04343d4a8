[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uwsgikit"
version = "0.1.0"
description = "Building blocks for HTTP and WebSocket servers: response writer, header parser, permessage-deflate streams and helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "websocket", "permessage-deflate", "chunked", "headers", "getopt"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uwsgikit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
