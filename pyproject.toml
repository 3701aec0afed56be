[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kowalski"
version = "0.1.0"
description = "Conversational agents for a local Ollama server: paper digesting, web search and page extraction"
requires-python = ">=3.11"
keywords = ["ollama", "llm", "agent", "chat", "research", "web-scraping", "search", "pdf"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = [
    "httpx>=0.25",
    "beautifulsoup4>=4.12",
    "cachetools>=5.3",
    "platformdirs>=3.0",
    "tomli-w>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
    "respx>=0.20",
]

[tool.hatch.build.targets.wheel]
packages = ["kowalski"]

[tool.hatch.build.targets.sdist]
include = ["kowalski", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
ignore_missing_imports = true
