import math


def to_int(value: object) -> int | None:
    """Coerce a value to an integer if possible.

    Integral floats and numeric strings are accepted; booleans, NaN and
    infinities are not.

    Args:
        value: Value to coerce.

    Returns:
        Integer value or None.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None
