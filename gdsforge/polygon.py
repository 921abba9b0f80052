######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################

import struct
import warnings

import numpy

from gdsforge.units import coordinate_values
from gdsforge.error import UnclosedPolygonWarning
from gdsforge.gdsiiformat import MAX_POINTS, _quantize, _write_xy
from gdsforge.operation import split_polygon


class Element(object):
    """
    Base class of everything that can be pushed into a `Cell`.
    """

    __slots__ = ()

    def into_cell(self, name):
        """
        Create a new cell containing only this element.

        Parameters
        ----------
        name : string
            Name of the new cell.

        Returns
        -------
        out : `Cell`
        """
        from gdsforge.library import Cell

        return Cell(name).push(self)


class Polygon(Element):
    """
    Closed polygonal ring.

    The ring is expected to be closed, i.e., its first point must be
    repeated at the end.  Unclosed rings are closed automatically when
    the polygon is written (with an `UnclosedPolygonWarning`).

    Parameters
    ----------
    points : iterable of `Coordinate` or pairs of `Length`
        Vertices of the ring.
    layer : integer
        The GDSII layer number for this element.
    datatype : integer
        The GDSII datatype for this element (between 0 and 255).

    Attributes
    ----------
    points : Numpy array[N, 2]
        Length values of the vertices.
    kind : `AbsoluteLength` or `RelativeLength`
        Length kind of the vertices.
    layer : integer
        The GDSII layer number for this element.
    datatype : integer
        The GDSII datatype for this element.
    """

    __slots__ = "points", "kind", "layer", "datatype"

    def __init__(self, points, layer=0, datatype=0):
        self.points, self.kind = coordinate_values(points)
        self.layer = layer
        self.datatype = datatype

    def __str__(self):
        return "Polygon ({} vertices, layer {}, datatype {})".format(
            len(self.points), self.layer, self.datatype
        )

    def __repr__(self):
        return "Polygon({} vertices, {}, {})".format(
            len(self.points), self.layer, self.datatype
        )

    def to_rings(self, database_unit, max_points=MAX_POINTS):
        """
        Quantize this polygon into closed integer rings.

        Parameters
        ----------
        database_unit : `AbsoluteLength`
            Physical size of one database unit.
        max_points : integer
            Maximal number of points in each ring.

        Returns
        -------
        out : list of Numpy arrays
            Integer rings, each one with at most `max_points` points.
        """
        if len(self.points) == 0:
            return []
        xy = _quantize(self.points, self.kind, database_unit)
        if (xy[0] != xy[-1]).any():
            warnings.warn(
                "[GDSFORGE] Polygon not closed, starting at ({0[0]}, {0[1]}) and "
                "ending at ({1[0]}, {1[1]}).  Closing it automatically.".format(
                    xy[0], xy[-1]
                ),
                category=UnclosedPolygonWarning,
                stacklevel=4,
            )
            xy = numpy.concatenate((xy, xy[:1]))
        return split_polygon(xy, max_points)

    def to_gds(self, outfile, database_unit):
        """
        Convert this object to a series of GDSII elements.

        Parameters
        ----------
        outfile : open file
            Output to write the GDSII.
        database_unit : `AbsoluteLength`
            Physical size of one database unit.
        """
        for ring in self.to_rings(database_unit):
            outfile.write(
                struct.pack(
                    ">4Hh2Hh",
                    4,
                    0x0800,
                    6,
                    0x0D02,
                    self.layer,
                    6,
                    0x0E02,
                    self.datatype,
                )
            )
            _write_xy(outfile, ring)
            outfile.write(struct.pack(">2H", 4, 0x1100))
