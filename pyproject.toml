[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weldgen"
version = "0.1.0"
description = "Building blocks for model-driven code generation: model source loading, shape helpers, template helpers and a code generator base class"
requires-python = ">=3.10"
dependencies = []
keywords = ["codegen", "smithy", "code-generation", "templates", "model"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["weldgen"]

[tool.pytest.ini_options]
addopts = "-ra"
