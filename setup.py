from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="andersonmix",
    version="0.1.0",
    description="Anderson acceleration of fixed-point iterations",
    keywords="anderson acceleration mixing fixed-point picard iteration",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"andersonmix": ["py.typed"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=[
        "numpy",
        "scipy",
    ],
    extras_require={
        "dev": [
            "pytest>=7.1",
            "black == 22.3.0",
        ],
    },
    python_requires=">=3.11",
    license="Apache v2",
)
