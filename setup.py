"""
Installer configuration for the cerberus-client package.
"""

from setuptools import setup, find_packages

setup(
    name="cerberus-client",
    version="1.0.0",
    description="Authentication client for the Cerberus secrets-management service",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "httpx>=0.23.0",
        "boto3>=1.26.0",
        "botocore>=1.29.0",
        "cryptography>=39.0.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "cerberus-auth=cerberus_client.cli.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
