[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cstorcsi"
version = "0.1.0"
description = "Helpers for a cStor CSI volume driver: size rounding, CSI payloads, usage events, volume configs, mount and endpoint utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["csi", "cstor", "storage", "volumes", "kubernetes", "iscsi"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cstorcsi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
