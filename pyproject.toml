[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "patients-service"
version = "0.1.0"
description = "HTTP service for managing patient records, contacts, identifiers, insurance policies and documents backed by PostgreSQL"
requires-python = ">=3.10"
keywords = ["patients", "medical", "rest", "http", "postgresql", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Intended Audience :: Healthcare Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]
dependencies = [
    "flask",
    "pyyaml",
    "sqlalchemy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
patients-service = "patients_service.app:main"

[tool.hatch.build.targets.wheel]
packages = ["patients_service"]

[tool.pytest.ini_options]
addopts = "-ra"
