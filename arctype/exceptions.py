"""
ArcType warnings
"""


class ConversionWarning(UserWarning):
    """A flat/curved conversion completed, but not at the replaced element's stacking index."""
