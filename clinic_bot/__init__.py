"""
Conversational back-end for the clinic website chat widget.
"""

__version__ = "0.1.0"
