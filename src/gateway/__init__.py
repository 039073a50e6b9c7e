"""
Portal communication gateway.

Resolves portal principals to tenant accounts and bridges them to the
calling, messaging and push providers.
"""

__version__ = "0.1.0"
