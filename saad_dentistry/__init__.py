"""
SaaD Dentistry booking and payment core.
"""

__version__ = "1.0.0"
