######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################

import datetime
import io
import struct
import warnings
from pathlib import Path as _FilePath

from gdsforge.units import (
    AbsoluteLength,
    Angle,
    Coordinate,
    MICROMETER,
    NANOMETER,
    METER,
    as_coordinate,
    coordinate_values,
)
from gdsforge.error import (
    CellOwnershipError,
    CircularReferenceError,
    DuplicateCellNameWarning,
    LayoutError,
    LayoutWarning,
)
from gdsforge.polygon import Element
from gdsforge.gdsiiformat import (
    _eight_byte_real,
    _eight_byte_real_to_float,
    _pack_string,
    _quantize,
    _record_reader,
    _write_xy,
)


def _open(outfile, mode):
    if hasattr(outfile, "__fspath__"):
        return open(outfile.__fspath__(), mode), True
    if isinstance(outfile, (str, _FilePath)):
        return open(outfile, mode), True
    return outfile, False


class DependencySet(object):
    """
    Set of cells required by a reference, keyed by cell name.

    Cells are compared by name only: adding a cell whose name is already
    present keeps the cell that was there first.  If the two cells are
    different objects a `DuplicateCellNameWarning` is issued.  Iteration
    is in ascending order of cell names.

    The set also keeps track of ownership: every cell counts the number
    of dependency sets that currently hold it.  Draining a set releases
    its cells.

    Parameters
    ----------
    cells : iterable of `Cell`
        Initial contents.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells=()):
        self._cells = {}
        for cell in cells:
            self.add(cell)

    def __str__(self):
        return "DependencySet (" + ", ".join(self.names()) + ")"

    def __repr__(self):
        return "DependencySet([{}])".format(", ".join(repr(n) for n in self.names()))

    def __len__(self):
        return len(self._cells)

    def __iter__(self):
        return iter([self._cells[name] for name in self.names()])

    def __contains__(self, cell):
        name = cell.name if isinstance(cell, Cell) else cell
        return name in self._cells

    def __getitem__(self, name):
        return self._cells[name]

    def names(self):
        """Names of the cells in this set, in ascending order."""
        return sorted(self._cells)

    def add(self, cell):
        """
        Insert a cell in this set.

        Parameters
        ----------
        cell : `Cell`
            Cell to be inserted.

        Returns
        -------
        out : bool
            True if the cell was inserted, False if a cell with the same
            name was already present.
        """
        existing = self._cells.get(cell.name)
        if existing is None:
            self._cells[cell.name] = cell
            cell._holders += 1
            return True
        if existing is not cell:
            warnings.warn(
                "[GDSFORGE] Cell name {0} is used by more than one cell (or the "
                "cell references itself).  Keeping the first one "
                "found.".format(cell.name),
                category=DuplicateCellNameWarning,
                stacklevel=3,
            )
        return False

    def drain(self):
        """
        Remove and return all cells from this set.

        Returns
        -------
        out : list of `Cell`
            The removed cells, in ascending order of names.
        """
        cells = list(self)
        self._cells = {}
        for cell in cells:
            cell._holders -= 1
        return cells

    def merge(self, other):
        """
        Move all cells from `other` into this set.

        Parameters
        ----------
        other : `DependencySet`
            Set to be drained.

        Returns
        -------
        out : `DependencySet`
            This object.
        """
        if other is self:
            return self
        for cell in other.drain():
            self.add(cell)
        return self

    def copy(self):
        """
        Create a new set holding the same cells.

        The cells become shared by both sets, so only one of them may be
        left holding the cells when the library is written.
        """
        return DependencySet(self)

    def is_flat(self):
        """
        Check that none of the cells in this set still holds nested
        dependencies.
        """
        for cell in self._cells.values():
            for reference in cell.references:
                if len(reference.dependencies) > 0:
                    return False
        return True


class Decorator(object):
    """
    Placement transformation of a reference.

    Parameters
    ----------
    rotation : `Angle` or None
        Angle of rotation of the reference.
    magnification : number or None
        Magnification factor for the reference.
    x_reflection : bool
        If True the reference is reflected parallel to the x direction
        before being rotated.
    """

    __slots__ = "rotation", "magnification", "x_reflection"

    def __init__(self, rotation=None, magnification=None, x_reflection=False):
        self.rotation = rotation
        self.magnification = magnification
        self.x_reflection = x_reflection

    def __repr__(self):
        return "Decorator({!r}, {!r}, {!r})".format(
            self.rotation, self.magnification, self.x_reflection
        )

    def __eq__(self, other):
        if not isinstance(other, Decorator):
            return NotImplemented
        return (
            self.rotation == other.rotation
            and self.magnification == other.magnification
            and self.x_reflection == other.x_reflection
        )

    def copy(self):
        return Decorator(self.rotation, self.magnification, self.x_reflection)

    def to_gds(self, outfile):
        """
        Write the STRANS, MAG and ANGLE records of this transformation.

        Parameters
        ----------
        outfile : open file
            Output to write the GDSII.
        """
        word = 0
        values = b""
        if self.x_reflection:
            word += 0x8000
        if self.magnification is not None:
            values += struct.pack(">2H", 12, 0x1B05) + _eight_byte_real(
                self.magnification
            )
        if self.rotation is not None:
            values += struct.pack(">2H", 12, 0x1C05) + _eight_byte_real(
                self.rotation.to_deg()
            )
        outfile.write(struct.pack(">3H", 6, 0x1A01, word))
        outfile.write(values)


def _set_rotation(decorator, angle):
    if not isinstance(angle, Angle):
        raise TypeError("[GDSFORGE] Rotation must be an Angle.")
    if decorator is None:
        return Decorator(rotation=angle)
    decorator.rotation = angle
    return decorator


class Ref(Element):
    """
    Placement of a frozen cell.

    Instances are normally created by `Cell.into_ref`.

    Parameters
    ----------
    name : string
        Name of the referenced cell.
    position : `Coordinate` or pair of `Length`
        Position where the reference is inserted.  Defaults to the
        origin.
    decorator : `Decorator` or None
        Optional rotation, magnification and reflection.
    dependencies : `DependencySet`
        Cells needed by the referenced cell, including itself.

    Attributes
    ----------
    name : string
        Name of the referenced cell.
    position : `Coordinate`
        Position where the reference is inserted.
    decorator : `Decorator` or None
        Optional rotation, magnification and reflection.
    dependencies : `DependencySet`
        Cells needed by this reference.  Emptied when the reference is
        placed in a cell that is itself frozen or written.
    """

    __slots__ = "name", "position", "decorator", "dependencies", "_owner"

    def __init__(self, name, position=None, decorator=None, dependencies=None):
        self.name = name
        self.position = Coordinate.zero() if position is None else as_coordinate(position)
        self.decorator = decorator
        self.dependencies = DependencySet() if dependencies is None else dependencies
        self._owner = None

    def __str__(self):
        return 'Ref ("{0}", at {1}, {2})'.format(
            self.name, self.position, self.decorator
        )

    def __repr__(self):
        return "Ref({0!r}, {1!r}, {2!r})".format(
            self.name, self.position, self.decorator
        )

    def set_pos(self, position):
        self.position = as_coordinate(position)
        return self

    def set_rot(self, angle):
        self.decorator = _set_rotation(self.decorator, angle)
        return self

    def to_array_ref(self, start, rows, row_end, cols, col_end):
        """
        Create an array placement of the same cell.

        The dependencies of this reference are copied, so either this
        reference or the new array must be placed in the layout (or
        both in the same hierarchy).

        Parameters
        ----------
        start : `Coordinate` or pair of `Length`
            Position of the first instance.
        rows : integer
            Number of rows.
        row_end : `Coordinate` or pair of `Length`
            Displacement point after the last row.
        cols : integer
            Number of columns.
        col_end : `Coordinate` or pair of `Length`
            Displacement point after the last column.

        Returns
        -------
        out : `ArrayRef`
        """
        return ArrayRef(
            self.name,
            start,
            row_end,
            col_end,
            rows,
            cols,
            None if self.decorator is None else self.decorator.copy(),
            self.dependencies.copy(),
        )

    def to_gds(self, outfile, database_unit):
        """
        Convert this object to a GDSII element.

        Parameters
        ----------
        outfile : open file
            Output to write the GDSII.
        database_unit : `AbsoluteLength`
            Physical size of one database unit.
        """
        values, kind = coordinate_values([self.position])
        xy = _quantize(values, kind, database_unit)
        outfile.write(struct.pack(">2H", 4, 0x0A00))
        outfile.write(_pack_string(0x1206, self.name))
        if self.decorator is not None:
            self.decorator.to_gds(outfile)
        _write_xy(outfile, xy)
        outfile.write(struct.pack(">2H", 4, 0x1100))


class ArrayRef(Element):
    """
    Placement of a frozen cell repeated on a grid.

    Instances are normally created by `Cell.into_array_ref` or
    `Ref.to_array_ref`.

    Parameters
    ----------
    name : string
        Name of the referenced cell.
    start : `Coordinate` or pair of `Length`
        Position of the first instance.
    row_end : `Coordinate` or pair of `Length`
        Displacement point after the last row.
    col_end : `Coordinate` or pair of `Length`
        Displacement point after the last column.
    rows : integer
        Number of rows (between 1 and 32767).
    cols : integer
        Number of columns (between 1 and 32767).
    decorator : `Decorator` or None
        Optional rotation, magnification and reflection.
    dependencies : `DependencySet`
        Cells needed by the referenced cell, including itself.

    Notes
    -----
    The GDSII COLROW record stores the number of columns before the
    number of rows, and the XY record stores the start point, the
    column end point and the row end point, in this order.
    """

    __slots__ = (
        "name",
        "start",
        "row_end",
        "col_end",
        "rows",
        "cols",
        "decorator",
        "dependencies",
        "_owner",
    )

    def __init__(
        self,
        name,
        start,
        row_end,
        col_end,
        rows,
        cols,
        decorator=None,
        dependencies=None,
    ):
        for label, count in (("rows", rows), ("cols", cols)):
            if int(count) != count or not 1 <= count <= 32767:
                raise ValueError(
                    "[GDSFORGE] ArrayRef {0} must be an integer between 1 and "
                    "32767, got {1}.".format(label, count)
                )
        self.name = name
        self.start = as_coordinate(start)
        self.row_end = as_coordinate(row_end)
        self.col_end = as_coordinate(col_end)
        self.rows = int(rows)
        self.cols = int(cols)
        self.decorator = decorator
        self.dependencies = DependencySet() if dependencies is None else dependencies
        self._owner = None

    def __str__(self):
        return 'ArrayRef ("{0}", {1} x {2}, at {3}, {4})'.format(
            self.name, self.rows, self.cols, self.start, self.decorator
        )

    def __repr__(self):
        return "ArrayRef({0!r}, {1!r}, {2!r}, {3!r}, {4}, {5}, {6!r})".format(
            self.name,
            self.start,
            self.row_end,
            self.col_end,
            self.rows,
            self.cols,
            self.decorator,
        )

    def set_start(self, start):
        self.start = as_coordinate(start)
        return self

    def set_col_end(self, col_end):
        self.col_end = as_coordinate(col_end)
        return self

    def set_row_end(self, row_end):
        self.row_end = as_coordinate(row_end)
        return self

    def set_rot(self, angle):
        self.decorator = _set_rotation(self.decorator, angle)
        return self

    def to_gds(self, outfile, database_unit):
        """
        Convert this object to a GDSII element.

        Parameters
        ----------
        outfile : open file
            Output to write the GDSII.
        database_unit : `AbsoluteLength`
            Physical size of one database unit.
        """
        values, kind = coordinate_values([self.start, self.col_end, self.row_end])
        xy = _quantize(values, kind, database_unit)
        outfile.write(struct.pack(">2H", 4, 0x0B00))
        outfile.write(_pack_string(0x1206, self.name))
        if self.decorator is not None:
            self.decorator.to_gds(outfile)
        outfile.write(struct.pack(">2H2h", 8, 0x1302, self.cols, self.rows))
        _write_xy(outfile, xy)
        outfile.write(struct.pack(">2H", 4, 0x1100))


class Cell(object):
    """
    Named collection of paths, polygons and references to other cells.

    Cells are identified by their names: equality, ordering and hashing
    only take the name into account.

    A cell is mutable until it is frozen by `into_ref` or
    `into_array_ref`.  Freezing moves the dependencies of all references
    in the cell into the returned reference, together with the cell
    itself.

    Parameters
    ----------
    name : string
        The name of the cell.

    Attributes
    ----------
    name : string
        The name of this cell.
    elements : list
        Elements of this cell, in insertion order.
    """

    __slots__ = "name", "elements", "_frozen", "_holders"

    def __init__(self, name):
        self.name = name
        self.elements = []
        self._frozen = False
        self._holders = 0

    def __str__(self):
        return 'Cell ("{}", {} elements, {} references)'.format(
            self.name, len(self.elements), len(self.references)
        )

    def __repr__(self):
        return "Cell({!r})".format(self.name)

    def __iter__(self):
        return iter(self.elements)

    def __len__(self):
        return len(self.elements)

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return self.name == other.name

    def __ne__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return self.name != other.name

    def __lt__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return self.name < other.name

    def __hash__(self):
        return hash(self.name)

    @property
    def frozen(self):
        """True after the cell has been turned into a reference."""
        return self._frozen

    @property
    def references(self):
        """`Ref` and `ArrayRef` elements of this cell."""
        return [e for e in self.elements if isinstance(e, (Ref, ArrayRef))]

    def _check_mutable(self):
        if self._frozen:
            raise CellOwnershipError(
                "[GDSFORGE] Cell {0} has been frozen into a reference and can no "
                "longer be modified.".format(self.name)
            )

    def rename(self, name):
        """
        Change the name of this cell.

        Parameters
        ----------
        name : string
            New name.

        Returns
        -------
        out : `Cell`
            This cell.
        """
        self._check_mutable()
        self.name = name
        return self

    def push(self, element):
        """
        Add a new element or group of elements to this cell.

        Parameters
        ----------
        element : `Path`, `Polygon`, `Ref`, `ArrayRef` or iterable
            The element or iterable of elements to be inserted in this
            cell.  Nested iterables are flattened.  Cells and libraries
            are not groups of elements and are rejected.

        Returns
        -------
        out : `Cell`
            This cell.

        Notes
        -----
        A `Ref` or `ArrayRef` can only be placed in one cell.  Use
        `Ref.to_array_ref` or create a new reference for additional
        placements.
        """
        self._check_mutable()
        if isinstance(element, (Ref, ArrayRef)):
            if element._owner is not None:
                raise CellOwnershipError(
                    "[GDSFORGE] Reference to {0} is already placed in cell "
                    "{1}.".format(element.name, element._owner.name)
                )
            element._owner = self
            self.elements.append(element)
            return self
        if isinstance(element, Element):
            self.elements.append(element)
            return self
        try:
            if isinstance(element, (str, Cell, Library)):
                raise TypeError(element)
            group = iter(element)
        except TypeError:
            raise ValueError(
                "[GDSFORGE] Only instances of `Path`, `Polygon`, `Ref`, and "
                "`ArrayRef` can be added to `Cell`."
            )
        for e in group:
            self.push(e)
        return self

    def get_dependencies(self):
        """
        Move the dependencies of every reference in this cell into a
        single set.

        The dependency sets of the references are emptied.

        Returns
        -------
        out : `DependencySet`
            All cells required by this cell (the cell itself is not
            included).
        """
        dependencies = DependencySet()
        for reference in self.references:
            assert reference.dependencies.is_flat(), (
                "[GDSFORGE] Nested dependencies found under reference to "
                "{0}.".format(reference.name)
            )
            dependencies.merge(reference.dependencies)
        return dependencies

    def _freeze(self):
        dependencies = self.get_dependencies()
        self._frozen = True
        dependencies.add(self)
        return dependencies

    def into_ref(self, position=None, decorator=None):
        """
        Freeze this cell and create a reference to it.

        Parameters
        ----------
        position : `Coordinate` or pair of `Length`
            Position where the reference is inserted.  Defaults to the
            origin.
        decorator : `Decorator` or None
            Optional rotation, magnification and reflection.

        Returns
        -------
        out : `Ref`
            Reference carrying this cell and all its dependencies.
        """
        return Ref(self.name, position, decorator, self._freeze())

    def into_array_ref(self, start, rows, row_end, cols, col_end, decorator=None):
        """
        Freeze this cell and create an array reference to it.

        Parameters
        ----------
        start : `Coordinate` or pair of `Length`
            Position of the first instance.
        rows : integer
            Number of rows.
        row_end : `Coordinate` or pair of `Length`
            Displacement point after the last row.
        cols : integer
            Number of columns.
        col_end : `Coordinate` or pair of `Length`
            Displacement point after the last column.
        decorator : `Decorator` or None
            Optional rotation, magnification and reflection.

        Returns
        -------
        out : `ArrayRef`
            Array reference carrying this cell and all its dependencies.
        """
        # Counts are checked before the cell is frozen.
        ref = ArrayRef(self.name, start, row_end, col_end, rows, cols, decorator)
        ref.dependencies = self._freeze()
        return ref

    def to_gds(self, outfile, database_unit, timestamp=None):
        """
        Convert this cell to a GDSII structure.

        Parameters
        ----------
        outfile : open file
            Output to write the GDSII.
        database_unit : `AbsoluteLength`
            Physical size of one database unit.
        timestamp : datetime object
            Sets the GDSII timestamp.  If None, the current time is
            used.
        """
        now = datetime.datetime.today() if timestamp is None else timestamp
        outfile.write(
            struct.pack(
                ">2H12h",
                28,
                0x0502,
                now.year,
                now.month,
                now.day,
                now.hour,
                now.minute,
                now.second,
                now.year,
                now.month,
                now.day,
                now.hour,
                now.minute,
                now.second,
            )
        )
        outfile.write(_pack_string(0x0606, self.name))
        for element in self.elements:
            element.to_gds(outfile, database_unit)
        outfile.write(struct.pack(">2H", 4, 0x0700))

    def save_as_lib(self, outfile, timestamp=None):
        """
        Write this cell and its dependencies as a GDSII library with
        default units.

        Parameters
        ----------
        outfile : file, string or Path
            The file (or path) where the GDSII stream will be written.
        timestamp : datetime object
            Sets the GDSII timestamp.  If None, the current time is
            used.
        """
        Library().push(self).save(outfile, timestamp)


class Library(object):
    """
    GDSII library (file).

    The first cell pushed is the top cell of the library.  Any further
    cells are written as ordinary dependencies of the top cell.

    Parameters
    ----------
    name : string or None
        Name of the GDSII library.  If None, the name of the top cell is
        used.
    database_unit : `AbsoluteLength`
        Physical size of one database unit (the precision of the file).
    user_unit : `AbsoluteLength`
        Physical size of the user unit.

    Attributes
    ----------
    name : string or None
        Name of the GDSII library.
    database_unit : `AbsoluteLength`
        Physical size of one database unit.
    user_unit : `AbsoluteLength`
        Physical size of the user unit.
    top_cells : list of `Cell`
        Cells pushed to this library.
    """

    __slots__ = "name", "database_unit", "user_unit", "top_cells", "_consumed"

    def __init__(self, name=None, database_unit=NANOMETER, user_unit=MICROMETER):
        self.name = name
        self.database_unit = None
        self.user_unit = None
        self.top_cells = []
        self._consumed = False
        self.set_database_unit(database_unit)
        self.set_user_unit(user_unit)

    def __str__(self):
        return "Library (" + ", ".join([c.name for c in self.top_cells]) + ")"

    def __iter__(self):
        return iter(self.top_cells)

    def set_database_unit(self, length):
        if not isinstance(length, AbsoluteLength) or length.value <= 0:
            raise ValueError("[GDSFORGE] Database unit must be a positive absolute length.")
        self.database_unit = length
        return self

    def set_user_unit(self, length):
        if not isinstance(length, AbsoluteLength) or length.value <= 0:
            raise ValueError("[GDSFORGE] User unit must be a positive absolute length.")
        self.user_unit = length
        return self

    def push(self, cell):
        """
        Add one or more cells to the library.

        Parameters
        ----------
        cell : `Cell` or iterable
            Cells to be included in the library.

        Returns
        -------
        out : `Library`
            This object.
        """
        if isinstance(cell, Cell):
            self.top_cells.append(cell)
        else:
            for c in cell:
                if not isinstance(c, Cell):
                    raise ValueError(
                        "[GDSFORGE] Only instances of `Cell` can be added to "
                        "`Library`."
                    )
                self.top_cells.append(c)
        return self

    def collect(self):
        """
        Flatten the cell hierarchy of this library.

        The library is consumed: all dependency sets in the hierarchy are
        drained and the library cannot be written again.

        Returns
        -------
        out : list of `Cell`
            The top cell followed by all its dependencies in ascending
            order of names.
        """
        if self._consumed:
            raise LayoutError("[GDSFORGE] Library has already been written.")
        self._consumed = True
        cells = self.top_cells
        self.top_cells = []
        if len(cells) == 0:
            return []
        top = cells[0]
        if top._holders > 0:
            raise CellOwnershipError(
                "[GDSFORGE] Top cell {0} is also held as a dependency of another "
                "reference.".format(top.name)
            )
        dependencies = top.get_dependencies()
        for cell in cells[1:]:
            dependencies.merge(cell.get_dependencies())
            dependencies.add(cell)
        if top in dependencies:
            raise CircularReferenceError(
                "[GDSFORGE] Top cell {0} is among its own dependencies.".format(
                    top.name
                )
            )
        shared = [c.name for c in dependencies if c._holders != 1]
        if len(shared) > 0:
            raise CellOwnershipError(
                "[GDSFORGE] Cells {0} are still held by references that were not "
                "placed in this library.".format(", ".join(shared))
            )
        return [top] + dependencies.drain()

    def save(self, outfile, timestamp=None):
        """
        Write the GDSII library to a file.

        The dimensions written in the file are the lengths of the
        elements divided by the database unit of the library.

        Parameters
        ----------
        outfile : file, string or Path
            The file (or path) where the GDSII stream will be written.
            It must be opened for writing operations in binary format.
        timestamp : datetime object
            Sets the GDSII timestamp.  If None, the current time is
            used.

        Notes
        -----
        The whole stream is encoded in memory before `outfile` is
        opened, so an encoding error leaves no partial file behind.
        """
        if self.name is not None:
            name = self.name
        elif len(self.top_cells) > 0:
            name = self.top_cells[0].name
        else:
            name = "library"
        cells = self.collect()
        if len(cells) == 0:
            warnings.warn(
                "[GDSFORGE] Creating a GDSII file without any cells.",
                category=LayoutWarning,
                stacklevel=2,
            )
        now = datetime.datetime.today() if timestamp is None else timestamp
        stream = io.BytesIO()
        stream.write(
            struct.pack(
                ">5H12h",
                6,
                0x0002,
                0x0258,
                28,
                0x0102,
                now.year,
                now.month,
                now.day,
                now.hour,
                now.minute,
                now.second,
                now.year,
                now.month,
                now.day,
                now.hour,
                now.minute,
                now.second,
            )
            + _pack_string(0x0206, name)
            + struct.pack(">2H", 20, 0x0305)
            + _eight_byte_real(self.database_unit / self.user_unit)
            + _eight_byte_real(self.database_unit / METER)
        )
        for cell in cells:
            cell.to_gds(stream, self.database_unit, timestamp=now)
        stream.write(struct.pack(">2H", 4, 0x0400))
        outfile, close = _open(outfile, "wb")
        try:
            outfile.write(stream.getvalue())
        finally:
            if close:
                outfile.close()


def get_gds_units(infile):
    """
    Return the unit and precision used in the GDS stream file.

    Parameters
    ----------
    infile : file, string or Path
        GDSII stream file to be queried.

    Returns
    -------
    out : 2-tuple
        Return ``(unit, precision)`` from the file, in meters.
    """
    infile, close = _open(infile, "rb")
    unit = precision = None
    try:
        for rec_type, data in _record_reader(infile):
            # UNITS
            if rec_type == 0x03:
                unit = data[1] / data[0]
                precision = data[1]
                break
    finally:
        if close:
            infile.close()
    return (unit, precision)


_element_names = {0x08: "BOUNDARY", 0x09: "PATH", 0x0A: "SREF", 0x0B: "AREF"}


def read_structures(infile):
    """
    Read the structures of a GDSII stream file.

    Only the records produced by `Library.save` are interpreted.

    Parameters
    ----------
    infile : file, string or Path
        GDSII stream file (or path) to be read.

    Returns
    -------
    out : list of 2-tuples
        ``(name, elements)`` for every structure, in file order.  Each
        element is a dictionary with the key ``"type"`` (``"BOUNDARY"``,
        ``"PATH"``, ``"SREF"`` or ``"AREF"``) and, when present in the
        file, ``"layer"``, ``"datatype"``, ``"width"``, ``"sname"``,
        ``"colrow"``, ``"x_reflection"``, ``"magnification"``,
        ``"rotation"`` (degrees) and ``"xy"`` (integer array with shape
        (N, 2)).
    """
    infile, close = _open(infile, "rb")
    structures = []
    elements = None
    element = None
    try:
        for rec_type, data in _record_reader(infile):
            # STRNAME
            if rec_type == 0x06:
                elements = []
                structures.append((data, elements))
            # ENDSTR
            elif rec_type == 0x07:
                elements = None
            # BOUNDARY, PATH, SREF, AREF
            elif rec_type in _element_names:
                element = {"type": _element_names[rec_type]}
            # LAYER
            elif rec_type == 0x0D:
                element["layer"] = int(data[0])
            # DATATYPE
            elif rec_type == 0x0E:
                element["datatype"] = int(data[0])
            # WIDTH
            elif rec_type == 0x0F:
                element["width"] = int(data[0])
            # XY
            elif rec_type == 0x10:
                element["xy"] = data.reshape((data.size // 2, 2))
            # SNAME
            elif rec_type == 0x12:
                element["sname"] = data
            # COLROW
            elif rec_type == 0x13:
                element["colrow"] = (int(data[0]), int(data[1]))
            # STRANS
            elif rec_type == 0x1A:
                element["x_reflection"] = (int(data[0]) & 0x8000) > 0
            # MAG
            elif rec_type == 0x1B:
                element["magnification"] = data[0]
            # ANGLE
            elif rec_type == 0x1C:
                element["rotation"] = data[0]
            # ENDEL
            elif rec_type == 0x11:
                elements.append(element)
                element = None
    finally:
        if close:
            infile.close()
    return structures
