"""
Compatibility shim for the revue list response.

The service does not document the shape of GET /api/Revue/All. Observed and
expected variants are a bare array, or an object carrying the array under
"data" or "revues"; items expose their id under "revueId", "id" or "_id".
These tables encode that guesswork in one place until the contract is pinned
down against the live service.
"""

from typing import Any, List, Optional

# Checked in order, first list-valued key wins
ARRAY_KEYS = ("data", "revues")

# Checked in order, first string-valued key wins
ID_KEYS = ("revueId", "id", "_id")


def extract_revue_array(body: Any) -> Optional[List[Any]]:
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in ARRAY_KEYS:
            value = body.get(key)
            if isinstance(value, list):
                return value
    return None


def extract_revue_id(item: Any) -> Optional[str]:
    if not isinstance(item, dict):
        return None
    for key in ID_KEYS:
        value = item.get(key)
        if isinstance(value, str):
            return value
    return None


def last_revue_id(body: Any) -> str:
    """Id of the last revue in a list response; AssertionError if unreadable"""
    revues = extract_revue_array(body)
    if revues is None:
        raise AssertionError("Expected an array of revues.")
    if not revues:
        raise AssertionError("No revues returned.")

    revue_id = extract_revue_id(revues[-1])
    if not revue_id or not revue_id.strip():
        raise AssertionError("Could not read revue id from the last item.")
    return revue_id
