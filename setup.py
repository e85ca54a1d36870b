#!/usr/bin/env python

from setuptools import setup


# Modified from http://stackoverflow.com/questions/2058802/
# how-can-i-get-the-version-defined-in-setup-py-setuptools-in-my-package
def version():
    import os
    import re

    init = os.path.join("kshuffle", "__init__.py")
    with open(init) as fp:
        initData = fp.read()
    match = re.search(r"^__version__ = ['\"]([^'\"]+)['\"]", initData, re.M)
    if match:
        return match.group(1)
    else:
        raise RuntimeError("Unable to find version string in %r." % init)


scripts = [
    "bin/fasta-ushuffle.py",
]

setup(
    name="kshuffle",
    version=version(),
    packages=["kshuffle"],
    keywords=["FASTA", "shuffle", "k-let", "uShuffle"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    license="BSD",
    description=(
        "Shuffle single-line FASTA sequences while preserving their k-let counts"
    ),
    python_requires=">=3.10",
    scripts=scripts,
    install_requires=[
        "biopython>=1.71",
        "numpy>=1.17",
    ],
    extras_require={
        "ushuffle": ["ushuffle>=1.1"],
        "test": ["pytest"],
    },
)
