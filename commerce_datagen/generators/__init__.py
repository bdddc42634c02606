"""
Commerce data generators.

Import generators from their modules.
"""
