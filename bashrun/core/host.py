import os


def is_windows() -> bool:
    """Returns True when running on a Windows-family OS."""
    return os.name == "nt"
