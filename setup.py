from setuptools import setup, find_packages

setup(
    name="segtree",
    version="0.1.0",
    description="Generic array-backed segment tree for point updates and range aggregates",
    author="Your Name",
    author_email="your.email@example.com",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "numpy",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "segtree-demo=segtree.demo:main",
        ],
    },
    python_requires=">=3.6",
)
