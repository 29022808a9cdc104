# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT

from setuptools import find_packages, setup

setup(
    name="equipreport",
    version="0.1.0",
    description="Console tool for recording, querying and exporting equipment incident reports",
    python_requires=">=3.10",
    packages=find_packages(include=["equipreport", "equipreport.*"]),
    install_requires=[
        "click>=8.0",  # Command line interface
        "loguru",  # Logging
        "dataclasses_json",  # JSON (de)serialization of the report dataclasses
        "tomlkit",  # Configuration file, keeps comments intact
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "equipreport = equipreport.__main__:main",
        ]
    },
)
