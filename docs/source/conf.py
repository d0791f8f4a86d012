# Configuration file for the Sphinx documentation builder.
#
# For a full list of options see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------

import os
import sys

import sphinx_rtd_theme
sys.path.insert(0, os.path.abspath('../../'))
import polymask

# -- Project information -----------------------------------------------------

project = 'polymask'
copyright = '2020, Clément Haëck'
author = 'Clément Haëck'

# The full version, including alpha/beta/rc tags
release = polymask.__version__

master_doc = 'index'

# -- General configuration ---------------------------------------------------
extensions = [
    'sphinx_rtd_theme',
    'sphinx.ext.autodoc',
    'sphinx.ext.autosummary',
    'sphinx.ext.napoleon',
]

napoleon_use_param = True
autosummary_generate = False

templates_path = ['_templates']

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']


# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
html_theme_options = {
    'navigation_depth': 3
}


def move_opt(app, what, name, obj, options, lines):
    """Remove [opt] marker of optional parameters.

    An optional argument is specified with :param ...: [opt] ...
    """
    import re
    rgx = r':param ([^:]*):\s?(\[opt\])'

    for i, line in enumerate(lines):
        m = re.search(rgx, line)
        if m:
            lines[i] = line[:m.start(2)] + line[m.end(2)+1:]


def setup(app):
    app.connect('autodoc-process-docstring', move_opt)
