"""Sphinx configuration file for the mastodon-action documentation."""

import os
import sys

sys.path.insert(0, os.path.abspath("../src"))

# -- Project information -----------------------------------------------------
project = "mastodon-action"
author = "mastodon-action contributors"

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "myst_parser",
    "sphinx_material",
]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Options for HTML output -------------------------------------------------
html_theme = "sphinx_material"

html_theme_options = {
    "nav_title": "mastodon-action",
    "color_primary": "purple",
    "color_accent": "deep-purple",
    "globaltoc_depth": 2,
    "globaltoc_collapse": True,
}

# -- Extension configuration -------------------------------------------------
napoleon_numpy_docstring = True
autodoc_member_order = "bysource"

# Support both reStructuredText and Markdown
source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}
