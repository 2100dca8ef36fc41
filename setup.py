from setuptools import find_packages, setup

"""
# Usage instructions
#
# To install the package
#   'pip install .'
#
# To install with test dependencies
#   'pip install -e .[test]'
"""

setup(
    name="tilebench",
    version="0.1.0",
    description="Benchmark harness for tiled CPU image kernels",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.24",
        "numba>=0.58",
        "msgspec>=0.18",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tilebench=tilebench.cli:main",
        ],
    },
)
