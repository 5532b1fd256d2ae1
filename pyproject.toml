[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "provaalert"
version = "0.1.0"
description = "Alertmanager webhook receiver with a minimal Instance resource model and reconciler"
requires-python = ">=3.10"
dependencies = []
keywords = ["alertmanager", "webhook", "monitoring", "alerts", "reconciler"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
provaalert = "provaalert.server:main"

[tool.hatch.build.targets.wheel]
packages = ["provaalert"]

[tool.pytest.ini_options]
addopts = "-ra"
