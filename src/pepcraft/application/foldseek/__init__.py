# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for searching structure databases for structures similar
to a query structure, using the *Foldseek* web server.
"""

__name__ = "pepcraft.application.foldseek"
__author__ = "The Pepcraft contributors"

from .match import *
from .search import *
from .webapp import *
