import os

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))

# PyPI long description
with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="underbar",
    version="0.1.0",
    description="Collection iteration primitives and stateful function decorators",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    packages=find_packages(include=["underbar", "underbar.*"]),
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
