from setuptools import find_packages, setup

setup(
    name="nap",
    version="0.1.0",
    description="A small REST client built on httpx",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "httpx >= 0.26",
        "certifi",
        "cryptography >= 40",
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
