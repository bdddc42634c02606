"""
Error types raised while building configurations and generating data.
"""


class SpecificationError(ValueError):
    """
    Raised when a configuration can not be turned into a dataset.

    Always terminal: the generation run for the affected site/catalog aborts.
    """
