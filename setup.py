# setup.py
"""Setup script for the site asset pipeline."""

import os

from setuptools import setup, find_packages

setup(
    name="site-assets",
    version="1.0.0",
    description="Asset pipeline for static sites: fingerprinting, Sass, minification and images with caching",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Site Assets Team",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "Pillow>=9.1.0",
        "tqdm>=4.50.0",
        "requests>=2.25.0",
        "libsass>=0.22.0",
        "rcssmin>=1.1.0",
        "rjsmin>=1.2.0",
        "mutagen>=1.45.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.0.0",
            "pytest-cov>=2.10.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Internet :: WWW/HTTP :: Site Management",
        "Topic :: Multimedia :: Graphics",
    ],
)
