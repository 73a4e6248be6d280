[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "echoplex"
version = "0.1.0"
description = "TCP echo servers built on select and epoll readiness notification, plus lazy and eager singletons"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "echo", "server", "select", "epoll", "io-multiplexing", "singleton"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
echoplex = "echoplex.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["echoplex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
