import os

from setuptools import setup, find_packages

version_file = os.path.join(os.path.dirname(__file__), "aamva_dlid", "version.py")
with open(version_file, "r") as f:
    exec(f.read())

readme_file = os.path.join(os.path.dirname(__file__), "README.md")
with open(readme_file, "r") as f:
    long_description = f.read()

setup(
    name="aamva_dlid",
    version=__version__,  # noqa: F821 -- loaded by 'exec' above
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"aamva_dlid.tables": ["*.csv"]},
    include_package_data=True,
    description="Incremental parser for AAMVA DL/ID driver's license barcode payloads.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="aamva dl/id pdf417 barcode driver license parser",
    python_requires=">=3.8",
    install_requires=[
        "sentinels",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "aamva-dlid-viewer=aamva_dlid.scripts.aamva_dlid_viewer:main",
        ],
    },
)
