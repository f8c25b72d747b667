"""Identifier generation for ads and synthesized owners.

INVARIANT: IDs are permanent. Once generated, an ID never changes.
Both ads and owners use random UUID4 strings; callers treat them as opaque.
"""

from __future__ import annotations

import uuid


def new_ad_id() -> str:
    """Generate a fresh ad ID."""
    return str(uuid.uuid4())


def new_owner_id() -> str:
    """Generate a fresh owner identity for a newly created ad.

    The creator does not supply an identity; one is synthesized and
    returned in the create response. It is the only credential that
    can later update or delete the ad.
    """
    return str(uuid.uuid4())
