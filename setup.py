# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="headercompare",
    version="0.1.0",
    description="Cross-check native header files produced by two independent generators",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["headercompare", "headercompare.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'headercompare=headercompare.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
