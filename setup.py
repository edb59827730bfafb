from setuptools import setup, find_packages

setup(
    name="familyGraph",
    version="0.1.0",
    description="Family knowledge graph enrichment: RDF codec, fact builder and age rules",
    packages=find_packages(include=["familyGraph", "familyGraph.*"]),
    package_data={
        "familyGraph": ["data/*.yml"]
    },
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "rdflib>=7.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["familyGraph=familyGraph.cli:main"],
    },
    license="MIT",
)
