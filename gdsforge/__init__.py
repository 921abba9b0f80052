######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################
"""
gdsforge is a Python module that builds hierarchical layouts in memory
and writes them as GDSII stream files.

Cells are identified by name.  Turning a cell into a reference freezes
it and carries it, together with everything it depends on, to the
place where the reference is used, so a library only needs its top
cell to write every structure exactly once.  Paths and polygons with
more points than a GDSII record can hold are split automatically.

GDSII format references:

- http://boolean.klaasholwerda.nl/interface/bnf/gdsformat.html
- http://www.artwork.com/gdsii/gdsii/
- http://www.buchanan1.net/stream_description.html
"""

__version__ = "0.3.0"

from gdsforge.units import (
    Length,
    AbsoluteLength,
    RelativeLength,
    Angle,
    Coordinate,
    NANOMETER,
    MICROMETER,
    MILLIMETER,
    CENTIMETER,
    METER,
    DBU,
    zero,
    to_relative,
    to_absolute,
)
from gdsforge.error import (
    LayoutError,
    CoordinateOverflowError,
    CellOwnershipError,
    CircularReferenceError,
    LayoutWarning,
    DuplicateCellNameWarning,
    UnclosedPolygonWarning,
)
from gdsforge.library import (
    Cell,
    DependencySet,
    Decorator,
    Ref,
    ArrayRef,
    Library,
    get_gds_units,
    read_structures,
)
from gdsforge.path import Path
from gdsforge.polygon import Element, Polygon
from gdsforge.gdsiiformat import MAX_POINTS
from gdsforge.operation import split_path, split_polygon
