"""
propgen — property definition table generator.

Reads declarative property records and emits the enumerator cases and
PropertyDefinition tables a host application's settings code includes.
"""

__version__ = "0.1.0"
