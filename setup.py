"""
Setup file.
"""

import os

from setuptools import find_packages, setup

KEYWORDS = "build compiler gcc shared-library assets incremental"
HERE = os.path.dirname(os.path.abspath(__file__))


def read_version() -> str:
    with open(os.path.join(HERE, "src", "sobuild", "__init__.py"), encoding="utf-8") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=", 1)[1].strip().strip('"')
    raise RuntimeError("__version__ not found")


if __name__ == "__main__":
    setup(
        name="sobuild",
        version=read_version(),
        description="Incremental build pipeline for C/C++ applications packaged as shared libraries",
        keywords=KEYWORDS,
        python_requires=">=3.9",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=["psutil"],
        extras_require={"test": ["pytest"]},
        entry_points={"console_scripts": ["sobuild=sobuild.cli:main"]},
    )
