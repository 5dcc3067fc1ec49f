"""
File name utilities
"""
import os


def extension_of(name: str) -> str:
    """
    Extension of a file name without the dot: the part after the last '.'.
    A leading dot does not start an extension (".bashrc" -> "").
    """
    return os.path.splitext(name)[1][1:]
