from __future__ import annotations

from setuptools import find_packages, setup  # type: ignore


setup(
    name="keyedcache",
    version="0.1.0",
    description="Thread-safe typed key/value stores, enum-keyed JSON views and a process-wide store registry.",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7",
            "httpx>=0.24",
        ],
    },
)
