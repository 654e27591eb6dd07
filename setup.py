# setup.py
import re
from pathlib import Path

from setuptools import setup, find_packages

# single source for the version: bilisp/__init__.py
VERSION = re.search(
    r'^__version__ = "([^"]+)"', Path(__file__).with_name("bilisp").joinpath("__init__.py").read_text(), re.M
).group(1)

setup(
    name="bilisp",
    version=VERSION,
    description="Bilisp: a small Lisp-like expression evaluator with Q-expressions",
    packages=find_packages(include=["bilisp", "bilisp.*", "bilisp_lsp", "bilisp_lsp.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "bilisp=bilisp.interpreter:main",
            "bilisp-ls=bilisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
