from setuptools import find_packages, setup

setup(
    name="weedclient",
    version="1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=["httpx"],
    extras_require={"test": ["pytest"]},
    description="Async client for SeaweedFS master and volume servers",
    license="Apache 2.0",
)
