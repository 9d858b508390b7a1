"""
Setup script for mvexport package.
"""

from setuptools import setup, find_packages

setup(
    name="mvexport",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        # Core numerical dependencies
        "numpy>=1.20.0",
        "pandas>=1.3.0",

        # Utilities
        "pyyaml>=6.0.0",
    ],
    extras_require={
        # Testing
        "test": [
            "pytest>=6.0.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'mvexport=mvexport.__main__:main',
        ],
    },
    description="Export multivariate analysis results (dudi, dapc, spca) for mvMapper",
    keywords="mvmapper, pca, dapc, spca, ordination, export",
    python_requires=">=3.8",
)
