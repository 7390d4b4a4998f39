"""Bundled publisher plugins.

Order matters: a page matching several publishers is classified as the one
listed first here.
"""

PLUGIN_MODULES = [
    "publisher_plugins.sciencedirect",
    "publisher_plugins.springer",
    "publisher_plugins.highwire",
    "publisher_plugins.wiley",
    "publisher_plugins.biomed",
    "publisher_plugins.pubmed",
    "publisher_plugins.mit",
    "publisher_plugins.plos",
    "publisher_plugins.frontiers",
    "publisher_plugins.nature",
    "publisher_plugins.jama",
    "publisher_plugins.apa",
]
