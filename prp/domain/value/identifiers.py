"""Strongly typed identifiers for portal domain entities.

Account ids are the stable principal ids assigned by the identity provider,
so they are strings rather than UUIDs.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", str)
PressReleaseId = NewType("PressReleaseId", UUID)
EndorsementRequestId = NewType("EndorsementRequestId", UUID)
