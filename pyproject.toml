[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ticketdesk"
version = "0.1.0"
description = "A small ticket-tracking HTTP API on Flask and SQLite, with CRUD endpoints, health checks and an OpenAPI document."
requires-python = ">=3.10"
keywords = ["tickets", "issue-tracker", "rest", "api", "flask", "wsgi", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "flask>=2.2",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
ticketdesk = "ticketdesk.server:main"

[tool.hatch.build.targets.wheel]
packages = ["ticketdesk"]

[tool.hatch.build.targets.sdist]
include = ["ticketdesk", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
