#!/usr/bin/env python
import os

from setuptools import find_packages, setup


def get_version():
    path = os.path.join(os.path.dirname(__file__), "src", "photobooth", "version.py")
    namespace = {}
    with open(path, encoding="utf-8") as f:
        exec(f.read(), namespace)
    return namespace["__version__"]


setup(
    name="photobooth",
    version=get_version(),
    description="Compositing engine for photo-booth filters, frames and collages",
    license="MIT",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "Pillow>=10.1",
        "numpy",
        "aggdraw",
        "scipy",
        "scikit-image",
        "attrs>=22.2.0",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["photobooth=photobooth.__main__:main"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Graphics",
    ],
)
