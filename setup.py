# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="mkmk",
    version="0.1.0",
    description="Makefile generator driven by the include structure of C-family sources",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["mkmk", "mkmk.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'mkmk=mkmk.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
