from setuptools import find_packages, setup

exec(open("adaptsptk/version.py").read())

with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="adaptsptk",
    version=__version__,
    description="Sample-by-sample adaptive cepstral analysis of speech",
    author="SPTK Working Group",
    author_email="takenori@sp.nitech.ac.jp",
    url="https://sp-nitech.github.io/sptk/",
    packages=find_packages(exclude=("assets", "docs", "tests", "tools")),
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords="dsp speech signal processing sptk pytorch adaptive cepstrum",
    license="Apache 2.0",
    classifiers=[
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">= 3.10",
    install_requires=[
        "numpy",
        "torch >= 1.10.0",
        "tqdm",
    ],
    extras_require={
        "dev": [
            "black",
            "flake8",
            "isort",
            "numpydoc",
            "pydata-sphinx-theme",
            "pytest",
            "pytest-cov",
            "sphinx",
            "twine",
        ],
    },
)
