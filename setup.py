"""Setup script for fits-view package."""

from setuptools import setup, find_packages

setup(
    name="fits-view",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "opencv-python>=4.5.0",
        "astropy>=5.0",
        "pyyaml>=6.0",
        "click>=8.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "fits-render=fits_view.cli.render:main",
            "fits-cuts=fits_view.cli.cuts:main",
        ],
    },
)
