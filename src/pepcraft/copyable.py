# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft"
__author__ = "The Pepcraft contributors"
__all__ = ["Copyable"]

import abc


class Copyable(metaclass=abc.ABCMeta):
    """
    Base class of :class:`Residue` and :class:`ResidueGraph`, providing
    an independent :func:`copy()`.

    A copy is created in two steps:
    :func:`__copy_create__()` calls the constructor, so that subclasses
    with constructor parameters must override it.
    :func:`__copy_fill__()` then transfers the state the constructor
    does not set.
    Overriding methods call the ``super()`` method first.
    """

    def copy(self):
        """
        Copy the object.

        Returns
        -------
        copy
            A copy of this object, that shares no mutable state with it.
        """
        clone = self.__copy_create__()
        self.__copy_fill__(clone)
        return clone

    def __copy_create__(self):
        return type(self)()

    def __copy_fill__(self, clone):
        pass
