from typing import Any, List, Tuple


REQUIRED_FIELDS = ("symptoms", "lat", "lng")

MISSING_FIELDS_MESSAGE = "Missing fields"


def missing_fields(payload: Any) -> List[str]:
    """Return the required fields that are absent or falsy in a request body.

    Falsy values (empty string, 0, None) count as missing, so a coordinate of
    exactly 0 is rejected too.
    """
    if not isinstance(payload, dict):
        return list(REQUIRED_FIELDS)

    missing: List[str] = []
    for key in REQUIRED_FIELDS:
        val = payload.get(key)
        if isinstance(val, str):
            val = val.strip()
        if not val:
            missing.append(key)
    return missing


def validate_lookup_payload(payload: Any) -> Tuple[bool, str]:
    """
    Check a doctor lookup body before any outbound call is made.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if missing_fields(payload):
        return False, MISSING_FIELDS_MESSAGE
    return True, ""
