"""Setup configuration for booker-e2e tool."""

from setuptools import setup, find_packages

setup(
    name="booker-e2e",
    version="0.1.0",
    description="E2E lifecycle test tool for the Restful Booker API",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "booker-e2e=booker_e2e.cli:main",
        ],
    },
)
