[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jclassparse"
version = "0.8.1"
description = "Parsing and validation of Java class file constant pools, descriptors and names"
requires-python = ">=3.10"
dependencies = []
keywords = ["java", "jvm", "classfile", "constant-pool", "descriptor", "parser"]
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
    "Topic :: Software Development :: Disassemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jclassparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
