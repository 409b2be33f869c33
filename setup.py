import os
from typing import Dict, Final, List

from setuptools import setup, find_packages

this_directory: Final[str] = os.path.abspath(os.path.dirname(__file__))

__lib_name__ = "zstring"
__version__ = open(os.path.join(this_directory, "VERSION"), "r").read().strip()

with open(os.path.join(this_directory, "README.md"), "r", encoding="utf-8") as f:
    long_description = f.read()

entry_points: Dict[str, List[str]] = {
    "console_scripts": [
        "zs_split=cli.split:main",
        "zs_wc=cli.wc:main",
    ],
}

extras_require: Dict[str, List[str]] = {
    "test": ["pytest", "pytest-repeat", "numpy"],
    "bench": ["fire"],
}


setup(
    name=__lib_name__,
    version=__version__,
    description="Growable UTF-8 strings with codepoint-indexed editing, search, split and trim",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Natural Language :: English",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Operating System :: OS Independent",
        "Topic :: Text Processing :: General",
    ],
    python_requires=">=3.8",
    packages=find_packages(include=["zstring", "zstring.*", "cli"]),
    extras_require=extras_require,
    entry_points=entry_points,
)
