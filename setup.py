#!/usr/bin/env python3
"""
Setup script for the election and survey result export tool.

Install with:
    pip install -e .

With test tooling:
    pip install -e ".[dev]"
"""

from setuptools import setup
from pathlib import Path

# Read version
version_file = Path(__file__).parent / "version.py"
version_dict = {}
exec(version_file.read_text(), version_dict)
__version__ = version_dict.get("__version__", "1.0.0")

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="result-export",
    version=__version__,
    author="Result Export Contributors",
    author_email="",
    description="Role-aware, bilingual Excel and CSV exports of election and survey results",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    py_modules=[
        "export_types",
        "export_errors",
        "label_catalog",
        "document_analyzer",
        "section_builder",
        "export_renderers",
        "export_coordinator",
        "document_source",
        "web_ui",
        "config",
        "logging_config",
        "cli",
        "version",
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Office/Business :: Office Suites",
        "Topic :: Sociology",
    ],
    python_requires=">=3.11",
    install_requires=[
        "requests>=2.28.0",
        "tenacity>=8.0.0",
        "gradio>=4.0.0",
        "XlsxWriter>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "openpyxl>=3.1.0",
            "ruff>=0.1.0",
            "pyright>=0.1.0",
            "pre-commit>=3.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "openpyxl>=3.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "result-export=cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords="election survey results export excel csv arabic",
)
