"""
Setup configuration for consent-admin.

The CLI command 'consent-admin' wraps the click group in consent_admin/cli.py.
"""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

# Read version from constants.py
version = "1.2.0"
try:
    with open("consent_admin/constants.py") as f:
        for line in f:
            if line.startswith("CONSENT_ADMIN_VERSION"):
                version = line.split('"')[1]
                break
except OSError:
    pass  # Fall back to hardcoded version if constants.py is not readable

# Read requirements
requirements = []
with open("requirements.txt") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

# Read dev requirements
dev_requirements = []
try:
    with open("requirements-dev.txt") as f:
        dev_requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]
except FileNotFoundError:
    pass

setup(
    name="consent-admin",
    version=version,
    description="Per-user consent reconciliation for identity attribute release",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "docs"]),
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "consent-admin=consent_admin.cli:main",
        ],
    },
    install_requires=requirements,
    extras_require={
        "dev": dev_requirements,
        "test": dev_requirements,
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP :: Session",
        "Topic :: Security",
    ],
    keywords="consent identity-provider attribute-release saml privacy",
)
