#!/usr/bin/env python3

from setuptools import setup

setup(
    name="dmusicpak",
    version="1.0.1",
    packages=["dmusicpak"],
    entry_points = {
        'console_scripts': ['dmusicpak = dmusicpak.commandline:main']
    },
    python_requires=">=3.8",
    license="BSD",
    description="Reader and writer for DMusicPak music package files in pure Python 3",
    long_description="""
A DMusicPak file bundles up to four optional sections into a single
binary container: descriptive metadata, timed lyrics, the raw audio
file, and cover art. This package encodes and decodes the container
format, and ships a small command-line tool for creating, inspecting
and unpacking packages.
""",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
