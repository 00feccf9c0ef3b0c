""" Setup file for lobster

sphinx directives:

.  automodule:: package.module

"""
import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="lobster",
    version="0.1.0",
    author="The lobster developers",
    license="GPL-3.0-or-later",
    description="The LOBSTER ocean biogeochemistry model as a host-model plugin",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Oceanography",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "pandas",
        "pint",
        "scipy",
        "numba",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
