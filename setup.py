#!/usr/bin/env python3
"""
Setup Script for the Deepfake Likelihood Scoring Engine
========================================================

Installation:
    pip install -e .              # Development install
    pip install -e .[dev]         # With dev dependencies

Build:
    python -m build
    twine upload dist/*
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read version from package
version = {}
with open("deepfake_scorer/__init__.py") as f:
    for line in f:
        if line.startswith("__version__"):
            exec(line, version)
            break

VERSION = version.get("__version__", "0.1.0")

# Read README for long description
README = Path("README.md")
LONG_DESCRIPTION = README.read_text() if README.exists() else ""

# Core dependencies
INSTALL_REQUIRES = [
    "numpy>=1.21.0",
    "pyyaml>=6.0",
    "python-dotenv>=1.0.0",
    "colorlog>=6.0.0",
    "tqdm>=4.64.0",
]

# Optional dependencies
EXTRAS_REQUIRE = {
    "dev": [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "black>=23.0.0",
        "isort>=5.12.0",
        "flake8>=6.0.0",
        "mypy>=1.0.0",
        "types-PyYAML>=6.0.0",
    ],
}

# Add 'all' extra that includes everything
EXTRAS_REQUIRE["all"] = list(set(
    dep for deps in EXTRAS_REQUIRE.values() for dep in deps
))

setup(
    name="deepfake-scorer",
    version=VERSION,
    author="Deepfake Detection Team",
    author_email="team@example.com",
    description="Deterministic, content-blind deepfake likelihood scoring for video uploads",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    url="https://github.com/example/deepfake-scorer",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Video :: Analysis",
    ],
    keywords=[
        "deepfake",
        "detection",
        "scoring",
        "video",
    ],
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples"]),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    entry_points={
        "console_scripts": [
            "deepfake-score=deepfake_scorer.cli:main",
        ],
    },
    package_data={
        "": ["*.yaml", "*.yml"],
    },
    data_files=[
        ("config", ["config/default.yaml"]),
    ],
    zip_safe=False,
)
