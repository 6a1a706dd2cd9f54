[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "restgen"
version = "0.1.0"
description = "Build a registry of protobuf services, messages and REST mappings for generating HTTP gateway code"
requires-python = ">=3.10"
dependencies = []
keywords = ["protobuf", "rest", "grpc", "code generation", "gateway", "query string"]
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
    "Topic :: Software Development :: Code Generators",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["restgen"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
