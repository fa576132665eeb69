from setuptools import setup, find_packages

setup(
    name="sample-graph",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "requests",
        "tenacity",
        "ratelimit",
        "python-dotenv",
        "networkx",
        "pyyaml",
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
