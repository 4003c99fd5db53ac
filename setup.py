#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="goinit",
    version="1.1.1",
    description="Initialize new projects from template architecture archives",
    author="openframebox",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"goinit": ["data/*.json"]},
    python_requires=">=3.9",
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'goinit=goinit.cli:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
