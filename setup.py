from setuptools import find_packages, setup


def get_version() -> str:
    with open("fastprior/version.py", "r") as foo:
        version = foo.read().split("=")[-1].replace("'", "").replace('"', '').strip()
    return version


__author__ = {"name": "fastprior contributors", "email": ""}

# load long description
with open("README.md", "r") as foo:
    long_description = foo.read()

# load requirements
with open("requirements.txt", "r") as foo:
    requirements = [line for line in foo.read().split("\n") if line.strip()]

test_require = [
    "pytest",
    "pytest-pylint",
    "pytest-cov",
]

dev_require = (
    [
        "isort",
        "black",
        "flake8",
        "tox",
    ]
    + test_require
)

extras_require = {
    "test": test_require,
    "dev": dev_require,
    "all": dev_require,
}

setup(
    # package name `pip install fastprior`
    name="fastprior",
    # package version `major.minor.patch`
    version=get_version(),
    # small description
    description="SSD style prior box generation for anchor based detectors using pytorch",
    # long description
    long_description=long_description,
    # content type of long description
    long_description_content_type="text/markdown",
    # author of the repository
    author=__author__["name"],
    # author's email adress
    author_email=__author__["email"],
    # package license
    license="MIT",
    # package root directory
    packages=find_packages(include=["fastprior", "fastprior.*"]),
    # registry of presets
    package_data={"fastprior": ["registry.yaml"]},
    # requirements
    install_requires=requirements,
    # extra requirements
    extras_require=extras_require,
    include_package_data=True,
    # keywords that resemble this package
    keywords=["pytorch", "object detection", "SSD", "prior box", "anchor"],
    zip_safe=False,
    # classifiers for the package
    classifiers=[
        "Environment :: Console",
        "Natural Language :: English",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Programming Language :: Python :: 3",
    ],
)
