#!/usr/bin/env python
from setuptools import find_packages
from setuptools import setup

setup(
    name="te",
    version="0.0.1",
    description="TARIC export parser and element browser",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    py_modules=["manage"],
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "te = manage:main",
        ],
    },
    install_requires=[
        "apsw",
        "dj-database-url",
        "django",
        "lxml",
        "python-dotenv",
        "sentry-sdk",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-django",
        ],
    },
)
