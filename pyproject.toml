[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fractalnet"
version = "0.1.0"
description = "Distributed fractal computation over TCP: workers compute fragments that a server hands out and displays"
requires-python = ">=3.11"
dependencies = [
    "pygame",
]
keywords = ["fractal", "julia", "mandelbrot", "newton-raphson", "distributed", "worker", "tcp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fractalnet-worker = "fractalnet.worker:main"
fractalnet-server = "fractalnet.server_app:main"

[tool.hatch.build.targets.wheel]
packages = ["fractalnet"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
