from setuptools import find_packages, setup

setup(
    name="tabscope",
    version="0.1.0",
    description="In-memory profiling for uploaded tabular data: types, summaries, duplicates and chart series.",
    packages=find_packages(include=["tabscope", "tabscope.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "polars>=0.20",
        "click>=8.1",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "tabscope=tabscope.cli:main",
        ],
    },
)
