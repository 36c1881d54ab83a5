from setuptools import setup, find_packages
setup(
    name="static_perfect_hash",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=["numpy", "xxhash"],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.9",
)
