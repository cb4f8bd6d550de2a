from setuptools import setup, find_packages

setup(
    name="crdtsim",
    version="0.1.0",
    description="Teaching simulator for counter CRDTs over peer-to-peer and star networks",
    author="adamfilli",
    packages=find_packages(include=["crdtsim", "crdtsim.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
