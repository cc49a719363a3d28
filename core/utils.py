# core/utils.py

"""
Repository for program-wide utilities.
"""


def parse_id_list(raw: str) -> list[int]:
    """
    Parses a comma-separated list of numeric ids, e.g. "1, 2, 3".

    Raises:
        ValueError: If any non-blank entry is not an integer.
    """
    return [int(part.strip()) for part in raw.split(",") if part.strip()]


def first_present(data: dict, *keys: str, default=None):
    """Returns the value of the first key in `keys` that is present and not None."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def wire_id(value: object) -> object:
    """Sends numeric ids as JSON numbers, leaving any other identifier untouched."""
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return value
