"""
Setup script for mott_mc package.

Installation:
    pip install -e .
"""

from setuptools import setup, find_packages

setup(
    name="mott_mc",
    version="0.1.0",
    description="Screened Mott cross-section and angle sampling for electron Monte Carlo",
    author="William Comaskey",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "mott_mc": ["data/*.dat"],
        "mott_mc.config": ["*.yaml"],
    },
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "scipy>=1.10",
        "matplotlib>=3.7",
        "numba>=0.58",
        "pyyaml>=6.0",
        "tqdm>=4.65",
    ],
    extras_require={
        "dev": ["pytest>=7.3", "black>=23.0", "mypy>=1.3", "ipython>=8.12"],
        "test": ["pytest>=7.3"],
    },
)
