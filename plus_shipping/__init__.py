"""
Plus Shipping consignor management CLI.
"""

from plus_shipping.version import VERSION

__version__ = VERSION
