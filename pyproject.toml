[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kool"
version = "0.1.0"
description = "Services for a Docker-based development workflow: docker-compose wrapping, dependency checks, tarballs and a cloud deploy API client"
requires-python = ">=3.10"
keywords = ["docker", "docker-compose", "development", "deploy", "kubernetes", "tarball"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Typing :: Typed",
]
dependencies = [
    "pyyaml",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
