######################################################################
#                                                                    #
#  Copyright 2009-2019 Lucas Heitzmann Gabrielli.                    #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################

import logging

import pytest
import numpy
import gdsforge


def ring(n):
    t = numpy.linspace(0, 2 * numpy.pi, n, endpoint=False)
    pts = numpy.round(1e5 * numpy.vstack((numpy.cos(t), numpy.sin(t))).T).astype(int)
    return numpy.concatenate((pts, pts[:1]))


def test_split_path_small():
    pts = numpy.arange(20).reshape((10, 2))
    parts = gdsforge.split_path(pts, 10)
    assert len(parts) == 1
    assert (parts[0] == pts).all()


def test_split_path_count():
    parts = gdsforge.split_path(numpy.arange(10), 3)
    assert [p.tolist() for p in parts] == [
        [0, 1, 2],
        [2, 3],
        [3, 4, 5],
        [5, 6, 7],
        [7, 8, 9],
    ]


def test_split_path_large():
    pts = numpy.vstack((numpy.arange(20000), numpy.zeros(20000))).T
    parts = gdsforge.split_path(pts, 8191)
    assert all(len(p) <= 8191 for p in parts)
    assert len(parts) == 4
    for a, b in zip(parts[:-1], parts[1:]):
        assert (a[-1] == b[0]).all()
    rebuilt = numpy.concatenate([parts[0]] + [p[1:] for p in parts[1:]])
    assert (rebuilt == pts).all()


def test_split_path_limit():
    with pytest.raises(ValueError):
        gdsforge.split_path(numpy.arange(10), 2)


def test_split_polygon_small():
    pts = ring(100)
    parts = gdsforge.split_polygon(pts, 101)
    assert len(parts) == 1
    assert (parts[0] == pts).all()
    assert gdsforge.split_polygon(numpy.empty((0, 2)), 10) == []


def test_split_polygon_open_count():
    parts = gdsforge.split_polygon(numpy.arange(10), 4)
    assert len(parts) == 7
    assert all(len(p) <= 4 for p in parts)


def test_split_polygon_closed():
    pts = ring(1000)
    parts = gdsforge.split_polygon(pts, 100)
    assert len(parts) > 1
    for p in parts:
        assert len(p) <= 100
        assert (p[0] == p[-1]).all()
    vertices = set(map(tuple, pts.tolist()))
    covered = set()
    for p in parts:
        covered.update(map(tuple, p.tolist()))
    assert covered == vertices


def test_split_polygon_cut():
    pts = ring(12)
    parts = gdsforge.split_polygon(pts, 12)
    assert len(parts) == 2
    cut, rest = parts
    # n = 12 distinct points, chord from index 3 to index 9
    assert (cut == numpy.concatenate((pts[3:10], pts[3:4]))).all()
    assert (rest == numpy.concatenate((pts[:4], pts[9:]))).all()


def test_split_polygon_limit():
    with pytest.raises(ValueError):
        gdsforge.split_polygon(ring(10), 3)


def test_split_logging(caplog):
    with caplog.at_level(logging.INFO, logger="gdsforge.operation"):
        gdsforge.split_path(numpy.arange(10), 3)
    assert "Auto splitting path" in caplog.text
