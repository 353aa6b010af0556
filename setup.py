"""Setup configuration for lib-bitmap-extraction package."""

from setuptools import setup, find_packages
import os

# Read README if available (may not exist during docker build)
long_description = "Embedded Bitmap Extraction Tool"
if os.path.isfile("README.md"):
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [
        line.strip() for line in fh
        if line.strip() and not line.strip().startswith("#")
    ]

setup(
    name="lib-bitmap-extraction",
    version="1.0.0",
    description="Heuristic extractor for BMP images embedded in archive files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Multimedia :: Graphics",
        "Topic :: System :: Archiving",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: 3.14",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "extract-bitmaps=bitmap_extraction.cli.extract_bitmaps:main",
            "extract-bitmaps-env=bitmap_extraction.cli.docker:main",
        ],
    },
)
