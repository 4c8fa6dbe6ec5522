# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft"
__author__ = "The Pepcraft contributors"
__all__ = ["TextFile", "InvalidFileError"]

import abc
import io
from os import PathLike


class TextFile(metaclass=abc.ABCMeta):
    """
    Base class for line based structure files.

    The constructor creates an empty file, that is filled by the
    setter methods of the subclass.
    :func:`read()` and :func:`from_text()` keep the text content as
    list of lines, :func:`write()` writes these lines back.

    Attributes
    ----------
    lines : list of str
        The lines of the file.
        PROTECTED: Do not modify from outside.
    """

    def __init__(self):
        self.lines = []

    @classmethod
    def read(cls, file):
        """
        Parse a file given by its path or as text file object.

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.

        Returns
        -------
        file : TextFile
            An instance of the respective subclass.
        """
        if _is_path(file):
            with open(file, "r") as f:
                lines = f.read().splitlines()
        else:
            if not _is_text(file):
                raise TypeError("A file opened in 'text' mode is required")
            lines = file.read().splitlines()
        file_object = cls()
        file_object.lines = lines
        return file_object

    @classmethod
    def from_text(cls, text):
        """
        Parse the content of a text file given as string.

        Parameters
        ----------
        text : str
            The complete file content.

        Returns
        -------
        file : TextFile
            An instance of the respective subclass.
        """
        return cls.read(io.StringIO(text))

    def write(self, file):
        """
        Write the lines into a file given by its path or as text file
        object.

        Parameters
        ----------
        file : file-like object or str
            The file to be written to.
            Alternatively a file path can be supplied.
        """
        if _is_path(file):
            with open(file, "w") as f:
                f.write(str(self) + "\n")
        else:
            if not _is_text(file):
                raise TypeError("A file opened in 'text' mode is required")
            file.write(str(self) + "\n")

    def __str__(self):
        return "\n".join(self.lines)


class InvalidFileError(Exception):
    """
    Indicates that a file is malformed or does not contain the
    requested data.
    """

    pass


def _is_text(file):
    if isinstance(file, io.TextIOBase):
        return True
    # File wrappers, e.g. 'TemporaryFile'
    return hasattr(file, "file") and isinstance(file.file, io.TextIOBase)


def _is_path(file):
    return isinstance(file, (str, bytes, PathLike))
