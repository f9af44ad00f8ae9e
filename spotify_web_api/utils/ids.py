"""Spotify ID / URI conversion helpers"""

from typing import Any, List, Mapping, Sequence, Union

IdOrIds = Union[str, Sequence[str]]


def _as_list(value: IdOrIds) -> List[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


def id_to_uri(ids: IdOrIds, object_type: str) -> Union[str, List[str]]:
    """Convert Spotify object IDs to URIs

    Values that already look like a Spotify URI are left untouched.

    Args:
        ids: ID(s) to convert
        object_type: Spotify object type, e.g. "track"

    Returns:
        A single URI for a single input, otherwise a list of URIs
    """
    prefix = f"spotify:{object_type}:"
    uris = [value if value.startswith(prefix) or value.startswith("spotify") else prefix + value for value in _as_list(ids)]
    return uris[0] if len(uris) == 1 else uris


def uri_to_id(uri_ids: IdOrIds, object_type: str) -> Union[str, List[str]]:
    """Convert Spotify URIs to object IDs

    Args:
        uri_ids: URI(s) or ID(s) to convert
        object_type: Spotify object type, e.g. "track"

    Returns:
        A single ID for a single input, otherwise a list of IDs
    """
    prefix = f"spotify:{object_type}:"
    ids = [value.replace(prefix, "") for value in _as_list(uri_ids)]
    return ids[0] if len(ids) == 1 else ids


def to_comma_string(value: IdOrIds) -> str:
    """Join a sequence with commas; strings are returned unchanged"""
    if isinstance(value, str):
        return value
    return ",".join(value)


def get_snapshot_id(body: Any) -> Union[str, bool]:
    """Try to fetch a snapshot ID from a parsed response body

    Returns:
        The snapshot ID, or False if none exists
    """
    if isinstance(body, Mapping):
        snapshot_id = body.get("snapshot_id")
    else:
        snapshot_id = getattr(body, "snapshot_id", None)
    return snapshot_id if snapshot_id else False
