# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="gotracer",
    version="0.1.0",
    description="Inject call/return trace logging into every Go function body",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["gotracer", "gotracer.*"]),
    install_requires=[
        "tree-sitter>=0.22",
        "tree-sitter-go>=0.21",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'gotracer=gotracer.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
