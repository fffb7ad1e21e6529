"""
Primary key generation shared by every model.
"""
import uuid


def generate_uuid() -> str:
    """
    Generate a new primary key.

    Returns:
        str: A new UUID4 string
    """
    return str(uuid.uuid4())
