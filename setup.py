# setup.py
from setuptools import setup, find_packages

setup(
    name="shout",
    version="0.1.0",
    description="Простой и лёгкий логгер с ротацией и неблокирующей записью",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.1",
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "shout=shout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
