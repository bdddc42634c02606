"""
Configuration: settings, typed configuration nodes and the document loader.
"""
