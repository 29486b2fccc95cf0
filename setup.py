"""Packaging for PomoBlocks.

Install for development:
    pip install -e ".[tests]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "PomoBlocks",
        "CFBundleDisplayName": "PomoBlocks",
        "CFBundleIdentifier": "com.pomoblocks.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

py2app_kwargs = {}
if "py2app" in sys.argv:
    py2app_kwargs = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="PomoBlocks",
    version="0.1.0",
    packages=[
        "pomoblocks",
        "pomoblocks.audio",
        "pomoblocks.database",
        "pomoblocks.export",
        "pomoblocks.timer",
        "pomoblocks.ui",
    ],
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "SQLAlchemy>=2.0",
        "numpy",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "gui_scripts": ["pomoblocks = pomoblocks.__main__:main"],
    },
    **py2app_kwargs,
)
