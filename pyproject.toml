[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "alloy"
version = "0.1.0"
description = "File-based routing, loader discovery, HTML document rendering and a project command line for server-rendered React pages"
requires-python = ">=3.10"
dependencies = [
    "jinja2",
]
keywords = ["ssr", "react", "file-based routing", "tailwind", "scaffolding", "code generation"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
alloy = "alloy.main:main"

[tool.hatch.build.targets.wheel]
packages = ["alloy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
