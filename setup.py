from setuptools import setup, find_packages

setup(
    name="stakefour",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "filelock",  # Locking for the JSON record store
    ],
    extras_require={
        "test": ["pytest"],
    },
)
