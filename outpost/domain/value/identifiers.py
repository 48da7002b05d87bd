"""Strongly typed identifiers for Outpost domain entities.

Using NewType for strong typing prevents mixing up user ids with other
opaque strings such as provider keys or registry keys.
"""

from typing import NewType

# Opaque hex token assigned by the identifier generator
UserId = NewType("UserId", str)

# Canonical collision-domain string derived from a provider type/key pair
RegistryKey = NewType("RegistryKey", str)
