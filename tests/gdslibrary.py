######################################################################
#                                                                    #
#  Copyright 2009-2019 Lucas Heitzmann Gabrielli.                    #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################

import io
import pathlib

import pytest
import gdsforge
from gdsforge import DBU, MICROMETER, NANOMETER
from gdsforge.gdsiiformat import _record_reader

from tutils import um, rectangle, structure_names, frozen_date


def written(lib, timestamp):
    out = io.BytesIO()
    lib.save(out, timestamp)
    out.seek(0)
    return out


def library_name(stream):
    for rec_type, data in _record_reader(stream):
        if rec_type == 0x02:
            return data


def test_push():
    c1 = gdsforge.Cell("gl_push_1")
    c2 = gdsforge.Cell("gl_push_2")
    c3 = gdsforge.Cell("gl_push_3")
    lib = gdsforge.Library()
    assert lib.push(c1) is lib
    lib.push((c2, c3))
    assert lib.top_cells == [c1, c2, c3]
    assert list(lib) == [c1, c2, c3]
    with pytest.raises(ValueError):
        lib.push([c1, rectangle(0, 0, 1, 1)])


def test_units():
    lib = gdsforge.Library()
    assert lib.database_unit == NANOMETER
    assert lib.user_unit == MICROMETER
    assert lib.set_database_unit(NANOMETER * 10) is lib
    assert lib.set_user_unit(gdsforge.MILLIMETER) is lib
    with pytest.raises(ValueError):
        lib.set_database_unit(DBU)
    with pytest.raises(ValueError):
        lib.set_database_unit(1e-9)
    with pytest.raises(ValueError):
        lib.set_user_unit(MICROMETER * 0)
    with pytest.raises(ValueError):
        gdsforge.Library(database_unit=-NANOMETER)


def test_sorted_dependencies(frozen_date):
    top = gdsforge.Cell("top")
    for name in ("c", "a", "b"):
        top.push(gdsforge.Cell(name).push(rectangle(0, 0, 1, 1)).into_ref())
    structures = gdsforge.read_structures(
        written(gdsforge.Library().push(top), frozen_date)
    )
    assert structure_names(structures) == ["top", "a", "b", "c"]


def test_diamond(frozen_date):
    c = gdsforge.Cell("C").push(rectangle(0, 0, 1, 1))
    a = gdsforge.Cell("A").push(c.into_ref())
    b = gdsforge.Cell("B").push(c.into_ref(um(2, 0)))
    b.push(a.into_ref(um(0, 2)))
    d = gdsforge.Cell("D").push(a.into_ref()).push(b.into_ref(um(5, 5)))
    structures = gdsforge.read_structures(
        written(gdsforge.Library("diamond").push(d), frozen_date)
    )
    assert structure_names(structures) == ["D", "A", "B", "C"]
    assert [el["sname"] for el in structures[0][1]] == ["A", "B"]
    assert [el["sname"] for el in structures[2][1]] == ["C", "A"]


def test_rectangle(frozen_date):
    top = gdsforge.Cell("gl_rectangle").push(rectangle(0, 0, 10, 10, 1, 0))
    out = written(gdsforge.Library().push(top), frozen_date)
    structures = gdsforge.read_structures(out)
    assert structure_names(structures) == ["gl_rectangle"]
    el = structures[0][1][0]
    assert el["type"] == "BOUNDARY"
    assert el["layer"] == 1 and el["datatype"] == 0
    assert el["xy"].tolist() == [
        [0, 0],
        [10000, 0],
        [10000, 10000],
        [0, 10000],
        [0, 0],
    ]


def test_gds_units(frozen_date):
    out = written(gdsforge.Library(), frozen_date)
    unit, precision = gdsforge.get_gds_units(out)
    assert unit == pytest.approx(1e-6)
    assert precision == pytest.approx(1e-9)

    lib = gdsforge.Library(database_unit=NANOMETER * 10)
    lib.push(gdsforge.Cell("gl_gds_units").push(rectangle(0, 0, 1, 1)))
    out = written(lib, frozen_date)
    unit, precision = gdsforge.get_gds_units(out)
    assert unit == pytest.approx(1e-6)
    assert precision == pytest.approx(1e-8)
    out.seek(0)
    xy = gdsforge.read_structures(out)[0][1][0]["xy"]
    assert xy.max() == 100


def test_library_name(frozen_date):
    top = gdsforge.Cell("gl_name_top")
    assert library_name(written(gdsforge.Library().push(top), frozen_date)) == (
        "gl_name_top"
    )
    top = gdsforge.Cell("gl_name_top")
    lib = gdsforge.Library("named").push(top)
    assert library_name(written(lib, frozen_date)) == "named"


def test_extra_top_cells(frozen_date):
    top = gdsforge.Cell("gl_extra_top").push(
        gdsforge.Cell("gl_extra_z").into_ref()
    )
    extra = gdsforge.Cell("gl_extra_a").push(
        gdsforge.Cell("gl_extra_b").into_ref()
    )
    lib = gdsforge.Library().push([top, extra])
    structures = gdsforge.read_structures(written(lib, frozen_date))
    assert structure_names(structures) == [
        "gl_extra_top",
        "gl_extra_a",
        "gl_extra_b",
        "gl_extra_z",
    ]


def test_collect():
    top = gdsforge.Cell("gl_collect")
    top.push(gdsforge.Cell("gl_collect_b").into_ref())
    top.push(gdsforge.Cell("gl_collect_a").into_ref())
    lib = gdsforge.Library().push(top)
    cells = lib.collect()
    assert [c.name for c in cells] == ["gl_collect", "gl_collect_a", "gl_collect_b"]
    assert lib.top_cells == []
    with pytest.raises(gdsforge.LayoutError):
        lib.collect()


def test_circular(frozen_date):
    inner = gdsforge.Cell("gl_circular")
    top = gdsforge.Cell("gl_circular").push(inner.into_ref())
    with pytest.raises(gdsforge.CircularReferenceError):
        gdsforge.Library().push(top).save(io.BytesIO(), frozen_date)


def test_unplaced_copy(frozen_date):
    ref = gdsforge.Cell("gl_unplaced").into_ref()
    ref.to_array_ref(um(0, 0), 2, um(0, 2), 2, um(2, 0))
    top = gdsforge.Cell("gl_unplaced_top").push(ref)
    with pytest.raises(gdsforge.CellOwnershipError) as e:
        gdsforge.Library().push(top).save(io.BytesIO(), frozen_date)
    assert "gl_unplaced" in str(e.value)


def test_placed_copy(frozen_date):
    ref = gdsforge.Cell("gl_placed").push(rectangle(0, 0, 1, 1)).into_ref()
    aref = ref.to_array_ref(um(0, 0), 2, um(0, 2), 2, um(2, 0))
    top = gdsforge.Cell("gl_placed_top").push([ref, aref])
    structures = gdsforge.read_structures(
        written(gdsforge.Library().push(top), frozen_date)
    )
    assert structure_names(structures) == ["gl_placed_top", "gl_placed"]
    assert [el["type"] for el in structures[0][1]] == ["SREF", "AREF"]


def test_frozen_top(frozen_date):
    top = gdsforge.Cell("gl_frozen_top")
    top.into_ref()
    with pytest.raises(gdsforge.CellOwnershipError):
        gdsforge.Library().push(top).save(io.BytesIO(), frozen_date)


def test_save_twice(frozen_date):
    lib = gdsforge.Library().push(gdsforge.Cell("gl_save_twice"))
    lib.save(io.BytesIO(), frozen_date)
    with pytest.raises(gdsforge.LayoutError):
        lib.save(io.BytesIO(), frozen_date)


def test_empty(frozen_date):
    with pytest.warns(gdsforge.LayoutWarning):
        out = written(gdsforge.Library(), frozen_date)
    assert gdsforge.read_structures(out) == []
    out.seek(0)
    assert library_name(out) == "library"


def test_deterministic(frozen_date):
    def build():
        child = gdsforge.Cell("gl_deterministic_child")
        child.push(rectangle(0, 0, 1, 1))
        child.push(gdsforge.Path([um(0, 0), um(5, 5)], 2, 0, MICROMETER * 0.1))
        top = gdsforge.Cell("gl_deterministic")
        top.push(child.into_array_ref(um(0, 0), 3, um(0, 30), 2, um(20, 0)))
        return gdsforge.Library().push(top)

    first = written(build(), frozen_date).getvalue()
    second = written(build(), frozen_date).getvalue()
    assert first == second
    assert first[:4] == b"\x00\x06\x00\x02"
    assert first[-4:] == b"\x00\x04\x04\x00"


def test_file_paths(tmpdir, frozen_date):
    fname = str(tmpdir.join("gl_file_paths.gds"))
    top = gdsforge.Cell("gl_file_paths").push(rectangle(0, 0, 1, 1))
    gdsforge.Library().push(top).save(fname, frozen_date)
    assert structure_names(gdsforge.read_structures(fname)) == ["gl_file_paths"]
    assert gdsforge.get_gds_units(fname)[1] == pytest.approx(1e-9)

    fname = pathlib.Path(str(tmpdir)) / "gl_file_paths_pathlib.gds"
    top = gdsforge.Cell("gl_file_paths").push(rectangle(0, 0, 1, 1))
    gdsforge.Library().push(top).save(fname, frozen_date)
    assert structure_names(gdsforge.read_structures(fname)) == ["gl_file_paths"]
    with open(fname, "rb") as fin:
        assert gdsforge.get_gds_units(fin)[0] == pytest.approx(1e-6)


def test_overflow_leaves_no_file(tmpdir, frozen_date):
    fname = tmpdir.join("gl_overflow.gds")
    top = gdsforge.Cell("gl_overflow").push(rectangle(0, 0, 1, 1))
    wide = gdsforge.Cell("gl_overflow_wide").push(rectangle(0, 0, 3e6, 1))
    top.push(wide.into_ref())
    with pytest.raises(gdsforge.CoordinateOverflowError):
        gdsforge.Library().push(top).save(str(fname), frozen_date)
    assert not fname.check()

    out = io.BytesIO()
    top = gdsforge.Cell("gl_overflow").push(rectangle(-3e6, 0, 0, 1))
    with pytest.raises(gdsforge.CoordinateOverflowError):
        gdsforge.Library().push(top).save(out, frozen_date)
    assert out.getvalue() == b""
