#!/usr/bin/env python3
"""
Setup script for GTA Insights.

Installs the gta_insights package and the gta-insights command.
"""

from setuptools import setup, find_packages

# Read requirements from the requirements files
with open("requirements.txt") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

with open("requirements-test.txt") as f:
    test_requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="gta_insights",
    version="1.0.0",
    description="GTA urban growth analytics and the Urbo chat assistant, powered by Google Gemini",
    packages=find_packages(include=["gta_insights", "gta_insights.*"]),
    install_requires=requirements,
    extras_require={"test": test_requirements},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "gta-insights=gta_insights.cli:main",
        ],
    },
)
