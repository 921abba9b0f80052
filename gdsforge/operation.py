######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################

import logging

import numpy

logger = logging.getLogger(__name__)


def split_path(points, max_points):
    """
    Split an open point list into pieces with at most `max_points`
    points each.

    The list is bisected recursively.  Consecutive pieces share their
    boundary point, so the pieces can be drawn one after another
    without gaps.

    Parameters
    ----------
    points : array-like[N][2]
        Points of the path.
    max_points : integer
        Maximal number of points in each piece (at least 3).

    Returns
    -------
    out : list of Numpy arrays
        Pieces of the path, in order.

    Examples
    --------
    >>> parts = split_path(numpy.arange(20).reshape((10, 2)), 3)
    >>> len(parts)
    5
    """
    if max_points <= 2:
        raise ValueError("[GDSFORGE] max_points must be larger than 2.")
    points = numpy.asarray(points)
    if len(points) <= max_points:
        return [points]
    logger.info(
        "Auto splitting path with %d points (limit %d).", len(points), max_points
    )
    half = len(points) // 2
    return split_path(points[: half + 1], max_points) + split_path(
        points[half:], max_points
    )


def split_polygon(points, max_points):
    """
    Split a ring into rings with at most `max_points` points each.

    For a closed ring (first point equal to the last) with `n` distinct
    points, the run of points between indices ``n // 4`` and
    ``3 * n // 4`` is cut off along the chord joining them and closed
    into a ring of its own.  The remaining points, which still include
    both chord ends, form the second ring.  Both rings are split
    recursively until they are small enough.  Closed input produces
    closed rings only.

    Parameters
    ----------
    points : array-like[N][2]
        Points of the ring.
    max_points : integer
        Maximal number of points in each ring, counting the repeated
        closing point (at least 4).

    Returns
    -------
    out : list of Numpy arrays
        The resulting rings.
    """
    if max_points <= 3:
        raise ValueError("[GDSFORGE] max_points must be larger than 3.")
    points = numpy.asarray(points)
    if len(points) <= max_points:
        return [points] if len(points) > 0 else []
    logger.info(
        "Auto splitting polygon with %d points (limit %d).", len(points), max_points
    )
    closed = bool(numpy.all(points[0] == points[-1]))
    n = len(points) - 1 if closed else len(points)
    i0 = n // 4
    i1 = n * 3 // 4
    cut = numpy.concatenate((points[i0 : i1 + 1], points[i0 : i0 + 1]))
    rest = numpy.concatenate((points[: i0 + 1], points[i1:]))
    return split_polygon(cut, max_points) + split_polygon(rest, max_points)
