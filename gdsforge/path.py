######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################

import struct

from gdsforge.units import Length, coordinate_values
from gdsforge.polygon import Element
from gdsforge.gdsiiformat import MAX_POINTS, _quantize, _quantize_length, _write_xy
from gdsforge.operation import split_path


class Path(Element):
    """
    Open polyline written as a GDSII path element.

    Parameters
    ----------
    points : iterable of `Coordinate` or pairs of `Length`
        Points along the center of the path.
    layer : integer
        The GDSII layer number for this element.
    datatype : integer
        The GDSII datatype for this element (between 0 and 255).
    width : `Length` or None
        Width of the path.  If None, the width record is omitted.

    Attributes
    ----------
    points : Numpy array[N, 2]
        Length values of the points.
    kind : `AbsoluteLength` or `RelativeLength`
        Length kind of the points.
    layer : integer
        The GDSII layer number for this element.
    datatype : integer
        The GDSII datatype for this element.
    width : `Length` or None
        Width of the path.
    """

    __slots__ = "points", "kind", "layer", "datatype", "width"

    def __init__(self, points, layer=0, datatype=0, width=None):
        self.points, self.kind = coordinate_values(points)
        if width is not None:
            if not isinstance(width, Length):
                raise TypeError("[GDSFORGE] Path width must be a length.")
            if self.kind is not None and type(width) is not self.kind:
                raise TypeError(
                    "[GDSFORGE] Path width ({0}) and points ({1}) must be of the "
                    "same length kind.".format(
                        type(width).__name__, self.kind.__name__
                    )
                )
        self.layer = layer
        self.datatype = datatype
        self.width = width

    def __str__(self):
        return "Path ({} points, layer {}, datatype {}, width {})".format(
            len(self.points), self.layer, self.datatype, self.width
        )

    def __repr__(self):
        return "Path({} points, {}, {}, {!r})".format(
            len(self.points), self.layer, self.datatype, self.width
        )

    def to_pieces(self, database_unit, max_points=MAX_POINTS):
        """
        Quantize this path into integer point lists.

        Parameters
        ----------
        database_unit : `AbsoluteLength`
            Physical size of one database unit.
        max_points : integer
            Maximal number of points in each piece.

        Returns
        -------
        out : list of Numpy arrays
            Consecutive pieces of the path.  Adjacent pieces share one
            point.
        """
        if len(self.points) == 0:
            return []
        xy = _quantize(self.points, self.kind, database_unit)
        return split_path(xy, max_points)

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
        pieces = self.to_pieces(database_unit)
        if len(pieces) == 0:
            return
        width = None
        if self.width is not None:
            width = _quantize_length(self.width, database_unit)
        for piece in pieces:
            outfile.write(
                struct.pack(
                    ">4Hh2Hh",
                    4,
                    0x0900,
                    6,
                    0x0D02,
                    self.layer,
                    6,
                    0x0E02,
                    self.datatype,
                )
            )
            if width is not None:
                outfile.write(struct.pack(">2Hl", 8, 0x0F03, width))
            _write_xy(outfile, piece)
            outfile.write(struct.pack(">2H", 4, 0x1100))
