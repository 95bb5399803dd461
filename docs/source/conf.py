# Configuration file for the Sphinx documentation builder.
#
# This file only contains a selection of the most common options. For a full
# list see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------

import os
import sys

sys.path.insert(0, os.path.abspath("../.."))


# -- Project information -----------------------------------------------------

project = "adaptsptk"
copyright = "2022, SPTK Working Group"
author = "SPTK Working Group"
exec(open(f"../../{project}/version.py").read())
version = __version__
release = __version__


# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.viewcode",
    "numpydoc",
]
exclude_patterns = [
    "Thumbs.db",
    ".DS_Store",
]


# -- Options for HTML output -------------------------------------------------

html_theme = "pydata_sphinx_theme"
html_theme_options = {
    "navigation_with_keys": False,
    "logo": {
        "text": project,
    },
    "icon_links": [
        {
            "name": "SPTK",
            "url": "https://sp-nitech.github.io/sptk/",
            "icon": "fa-solid fa-house",
        },
    ],
    "footer_start": ["copyright"],
    "footer_center": ["sphinx-version"],
    "footer_end": ["theme-version"],
}
html_show_sourcelink = False
numpydoc_show_class_members = False
