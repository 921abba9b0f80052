######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################

import sys
from setuptools import setup

with open("README.md") as fin:
    long_description = fin.read()

with open("gdsforge/__init__.py") as fin:
    for line in fin:
        if line.startswith("__version__ ="):
            version = eval(line[14:])
            break

setup_requires = []
if {"pytest", "test", "ptr"}.intersection(sys.argv):
    setup_requires.append("pytest-runner")

setup(
    name="gdsforge",
    version=version,
    license="Boost Software License v1.0",
    description="Python module for writing hierarchical GDSII layouts.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords="GDSII CAD layout",
    packages=["gdsforge"],
    package_dir={"gdsforge": "gdsforge"},
    provides=["gdsforge"],
    python_requires=">=3.6",
    install_requires=["numpy"],
    setup_requires=setup_requires,
    tests_require=["pytest"],
    extras_require={"test": ["pytest"]},
    platforms="OS Independent",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Manufacturing",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Boost Software License 1.0 (BSL-1.0)",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
    ],
    zip_safe=True,
)
