# Configuration file for the Sphinx documentation builder.

# -- Project information -----------------------------------------------------
project = 'LegendreLab'
copyright = '2025, Caleb Kelly'
author = 'Caleb Kelly'

try:
    from legendrelab import __version__ as version
except ImportError:
    import os
    import sys
    sys.path.insert(0, os.path.abspath('..'))
    from legendrelab import __version__ as version
release = version

# -- General configuration ---------------------------------------------------
master_doc = 'index'
root_doc = 'index'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx.ext.autosummary',
    'sphinx.ext.mathjax',
    'sphinx_rtd_theme',
    'myst_parser',
]

autosummary_generate = True
autodoc_member_order = 'bysource'

myst_enable_extensions = ['dollarmath', 'colon_fence']
source_suffix = {
    '.rst': 'restructuredtext',
    '.md': 'markdown',
}

templates_path = ['_templates']
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

# -- Options for HTML output -------------------------------------------------
html_theme = 'sphinx_rtd_theme'
html_static_path = ['_static']
html_theme_options = {
    'prev_next_buttons_location': 'bottom',
    'collapse_navigation': True,
    'navigation_depth': 4,
}

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'numpy': ('https://numpy.org/doc/stable/', None),
    'scipy': ('https://docs.scipy.org/doc/scipy/', None),
    'xarray': ('https://docs.xarray.dev/en/stable/', None),
    'numba': ('https://numba.readthedocs.io/en/stable/', None),
}

# Napoleon settings
napoleon_numpy_docstring = True
napoleon_include_init_with_doc = False
napoleon_include_special_with_doc = True
napoleon_use_param = True
napoleon_use_rtype = True
