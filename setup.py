"""
Setup script for the homhash package.
"""

from setuptools import setup, find_packages

with open("requirements-dev.txt", "r") as f:
    dev_requirements = [
        line.strip() for line in f if line.strip() and not line.startswith("#")
    ]

setup(
    name="homhash",
    version="0.1.0",
    description="Incremental set-homomorphic hash functions (ristretto255, LtHash, MuHash, matrix)",
    author="homhash contributors",
    packages=find_packages(include=["homhash", "homhash.*"]),
    package_data={"homhash.tests": ["vectors/*.hex"]},
    python_requires=">=3.9",
    install_requires=[
        "cryptography>=41.0",
        "pysodium>=0.7.12",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-json-logger>=3.1",
    ],
    extras_require={
        "dev": dev_requirements,
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security :: Cryptography",
    ],
)
