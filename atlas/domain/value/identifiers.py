"""Strongly typed identifiers for Atlas domain entities.

Identifiers are numeric and assigned by the store on first save.
"""

from typing import NewType

AccountId = NewType("AccountId", int)
IdentityLinkId = NewType("IdentityLinkId", int)
MetricEventId = NewType("MetricEventId", int)
