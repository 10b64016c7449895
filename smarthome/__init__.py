"""Smart home gateway.

Unified device and sensor API over either a local JSON store or
Home Assistant.
"""

__version__ = "0.1.0"
