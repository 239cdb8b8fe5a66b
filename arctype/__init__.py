"""
ArcType - curved text layout and rendering for design editors
"""

__version__ = "0.1.0"
