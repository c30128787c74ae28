import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name = "dicelang",
    version = "0.1.0",
    description = "A small language for rolling, tagging and analysing tabletop dice",
    long_description = long_description,
    long_description_content_type = "text/markdown",
    packages = setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers = [
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Topic :: Games/Entertainment",
        "Topic :: Games/Entertainment :: Role-Playing",
    ],
    install_requires = [
        "sly>=0.4",
        "word2number>=1.1",
        "loguru>=0.7",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
    ],
    extras_require = {
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points = {
        "console_scripts": [
            "dicelang = dicelang.cli:main",
        ],
    },
    python_requires = ">=3.8"
)
