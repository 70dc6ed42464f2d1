"""Platform hidden-attribute detection."""

import os
import stat


def is_hidden(stat_result: os.stat_result) -> bool:
    """Check whether the platform flags an entry as hidden.

    This is independent of dotfile naming. Windows exposes a hidden bit in
    ``st_file_attributes`` and macOS/BSD expose ``UF_HIDDEN`` in ``st_flags``.
    Platforms with neither attribute never report an entry as hidden.

    Args:
        stat_result: Metadata of the entry, read without following symlinks.

    Returns:
        True if the platform hidden attribute is set.
    """
    attributes = getattr(stat_result, "st_file_attributes", None)
    if attributes is not None and attributes & stat.FILE_ATTRIBUTE_HIDDEN:
        return True

    flags = getattr(stat_result, "st_flags", None)
    if flags is not None and flags & stat.UF_HIDDEN:
        return True

    return False
