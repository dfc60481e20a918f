#!/usr/bin/env python3
"""
Setup script for xorbreak - Statistical XOR Key Recovery
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Read version from a version file
version = "1.0.0"
version_file = Path(__file__).parent / "xorbreak" / "__version__.py"
if version_file.exists():
    exec(version_file.read_text())
    version = __version__  # noqa: F821

setup(
    name="xorbreak",
    version=version,
    description="Statistical recovery of single-byte and repeating-key XOR",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="xorbreak Contributors",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "htmlcov"]),
    py_modules=["main"],
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "flask>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "hypothesis>=6.82.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "xorbreak=main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security :: Cryptography",
    ],
    keywords="ctf cryptanalysis xor frequency-analysis hamming-distance cryptopals",
    zip_safe=False,
)
