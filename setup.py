#!/usr/bin/env python3
"""
Setup script for comic-panels
=============================
"""

from pathlib import Path
from setuptools import setup, find_packages

HERE = Path(__file__).parent
README = (HERE / "README.md").read_text(encoding='utf-8')


def read_requirements(filename):
    """Read requirement lines from a file, skipping blanks and comments."""
    req_file = HERE / filename
    if req_file.exists():
        lines = req_file.read_text().strip().split('\n')
        return [line.strip() for line in lines if line.strip() and not line.startswith('#')]
    return []


setup(
    name="comic-panels",
    version="1.0.0",
    description="Comic page panel detection and reading order (Western and manga)",
    long_description=README,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Scientific/Engineering :: Image Recognition",
    ],
    keywords="comics manga panel detection reading order",

    package_dir={"": "src"},
    packages=find_packages(where="src"),

    python_requires=">=3.9",
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "test": [
            "pytest>=6.0",
        ],
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ],
    },
)
