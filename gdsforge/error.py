######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################
"""
Exceptions and warnings raised while building or writing a layout.

Data-quality problems are reported through the `warnings` module, so
they can be silenced, collected or promoted to errors with the usual
warning filters, e.g.:

>>> warnings.simplefilter("error", gdsforge.DuplicateCellNameWarning)
"""


class LayoutError(ValueError):
    """Base class for errors raised by gdsforge."""


class CoordinateOverflowError(LayoutError, OverflowError):
    """A quantized coordinate does not fit in a signed 32-bit integer."""


class CellOwnershipError(LayoutError):
    """
    A cell is used after being handed to a dependency set, or is still
    shared by more than one dependency set when the library is written.
    """


class CircularReferenceError(LayoutError):
    """The top cell of a library appears among its own dependencies."""


class LayoutWarning(UserWarning):
    """Base class for warnings issued by gdsforge."""


class DuplicateCellNameWarning(LayoutWarning):
    """
    Two different cells with the same name were found in the same
    dependency graph.  The first one seen is kept.
    """


class UnclosedPolygonWarning(LayoutWarning):
    """A polygon ring was closed automatically."""
