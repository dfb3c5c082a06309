from uuid import uuid4


def generate_id(length: int | None = None) -> str:
    """Generate a unique identifier string.

    Args:
        length: Optional number of hex characters to keep.

    Returns:
        A unique identifier as a string.
    """
    if length:
        return uuid4().hex[:length]
    return str(uuid4())
