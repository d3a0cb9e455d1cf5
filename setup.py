import os

from setuptools import find_packages, setup


# read the version from the VERSION file
def get_version():
    with open(os.path.join(os.path.dirname(__file__), "VERSION"), "r") as version_file:
        return version_file.read().strip()


# Set the version in the s3bridge/version.py file
def set_version_constant(version: str):
    with open(
        os.path.join(os.path.dirname(__file__), "s3bridge-core", "s3bridge", "version.py"), "w"
    ) as version_file:
        version_file.write(f'__version__ = "{version}"\n')


VERSION = get_version()
set_version_constant(VERSION)

setup(
    name="s3bridge",
    version=VERSION,
    description="Client adapter for the object operations of a bucket-based storage service",
    python_requires=">=3.10",
    package_dir={"": "s3bridge-core"},
    packages=find_packages(where="s3bridge-core"),
    install_requires=[
        "botocore>=1.31",
        "click>=8.1",
        "requests>=2.31",
        "xmltodict>=0.13",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-httpserver>=1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "s3bridge=s3bridge.cli.main:main",
        ],
    },
)
