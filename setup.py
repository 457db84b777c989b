# setup.py
from setuptools import setup, find_packages

setup(
    name="fuzzypath",
    version="1.0.0",
    description="Expand abbreviated path queries like 'us/kj/md' into matching filesystem paths",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Encuentra automáticamente la carpeta 'fuzzypath'
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'fuzzypath=fuzzypath.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
