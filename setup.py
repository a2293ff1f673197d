#!/usr/bin/env python3
"""
Setup script for mvn2src.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="mvn2src",
    version="0.1.0",
    author="mvn2src Contributors",
    author_email="example@example.com",
    description="A tool to extract the sources of a Maven project's dependencies",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=6.0",
        "tqdm>=4.60",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "mvn2src=mvn2src.main:main",
            "mvn2src-deps=mvn2src.tools.list_dependencies:main",
            "mvn2src-unpack=mvn2src.tools.unpack_archive:main",
        ],
    },
)
