"""Setup file for the Content Engine Connector package."""

from setuptools import setup, find_packages

setup(
    name="content-engine-connector",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click",
        "dependency-injector",
        "pydantic>=2",
        "python-dotenv",
        "pyyaml",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "content-engine-connector=content_engine_connector.__main__:main",
        ],
    },
    author="Pimentel",
    author_email="pimentel@example.com",
    description="Configuration core for a content engine search connector",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
)
