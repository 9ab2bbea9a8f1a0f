#!/usr/bin/env python3
"""
TxKV Setup Script
=================
Allows installation of the txkv package.

Usage:
    pip install -e .           # Development install
    pip install -e ".[test]"   # With test dependencies
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="txkv",
    version="1.0.0",
    packages=find_packages(include=["txkv", "txkv.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "txkv=txkv.repl:main",
        ],
    },
)
