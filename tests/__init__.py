# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import listing_xml, property_list
"""

from .utils import listing_xml, property_list

__all__ = ["listing_xml", "property_list"]
