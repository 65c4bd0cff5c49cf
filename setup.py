#!/usr/bin/env python3

from setuptools import setup, find_packages

with open("requirements.txt", "r") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="glyphfield",
    version="0.1.0",
    author="GlyphField Team",
    description="Text, icons and images drawn as a field of settling, draggable particles",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["glyphfield", "glyphfield.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7", "pytest-timeout>=2"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Graphics",
    ],
    entry_points={
        "console_scripts": [
            "glyphfield=glyphfield.cli:main",
        ],
    },
)
