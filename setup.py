from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="trafficsplit",
    version="0.1.0",
    description="Split travel demand across alternative routes under road closures.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*", "examples")),
    python_requires=">=3.10",
    install_requires=["networkx>=3.0", "PyYAML>=6.0", "jsonschema>=4.0"],
    package_data={"trafficsplit.schemas": ["*.json"]},
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["trafficsplit=trafficsplit.cli:main"]},
)
