"""
Traffic metrics core for the Enshi mountain highway network.
"""
__version__ = "0.1.0"
