"""Pure path helpers shared by the reader and the tests.

None of these functions touch the filesystem.
"""

import os
from typing import Union


def normalize_separators(path: str) -> str:
    """Replace every backslash with a forward slash.

    Args:
        path: Windows or unix style path

    Returns:
        Unix style path
    """
    return str(path).replace('\\', '/')


def extname(name: str) -> str:
    """Get the extension of a file name, including the dot.

    Same rule as Node's ``path.extname``: the extension starts at the
    last dot, unless every character before that dot is also a dot and
    nothing follows it. So ``.bashrc`` and ``..`` have no extension,
    while ``file.`` and ``...`` yield ``"."`` and ``...bashrc`` yields
    ``".bashrc"``.

    Args:
        name: Base name of an entry

    Returns:
        Extension with leading dot, or empty string
    """
    start_dot = -1
    # 0: no character seen before the last dot, 1: only dots, -1: other
    pre_dot_state = 0
    for index in range(len(name) - 1, -1, -1):
        if name[index] == '.':
            if start_dot == -1:
                start_dot = index
            elif pre_dot_state != 1:
                pre_dot_state = 1
        elif start_dot != -1:
            pre_dot_state = -1

    if start_dot == -1 or pre_dot_state == 0:
        return ''
    if pre_dot_state == 1 and start_dot == len(name) - 1 and start_dot == 1:
        return ''
    return name[start_dot:]


def strip_extension(name: str) -> str:
    """Remove the extension from a file name."""
    ext_size = len(extname(name))
    return name[:len(name) - ext_size] if ext_size > 0 else name


def join_name(
    parent: Union[str, bytes],
    name: Union[str, bytes],
    separator: Union[str, bytes]
) -> Union[str, bytes]:
    """Concatenate a parent path and an entry name.

    The separator is only inserted when the parent does not already end
    with it. Works on ``str`` or ``bytes`` as long as all three arguments
    share the same type.
    """
    if parent.endswith(separator):
        return parent + name
    return parent + separator + name


def to_bytes(path: Union[str, bytes, os.PathLike]) -> bytes:
    """Encode a path the way the OS would."""
    return os.fsencode(path)
