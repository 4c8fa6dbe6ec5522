from setuptools import find_packages, setup

setup(
    name="pepcraft",
    version="0.4.0",
    description=(
        "Build coarse-grained peptide backbones, exchange them as PDB files "
        "and search for similar structures"
    ),
    author="The Pepcraft contributors",
    license="BSD-3-Clause",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"pepcraft.structure.info": ["*.json"]},
    install_requires=[
        "numpy >= 1.25",
        "requests >= 2.12",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
