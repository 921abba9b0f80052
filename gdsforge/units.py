######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################
"""
Length, angle and coordinate types.

Two kinds of length exist: `AbsoluteLength`, a physical length stored
in micrometers, and `RelativeLength`, a length already expressed in
database units.  Lengths of different kinds cannot be mixed; use
`to_relative` and `to_absolute` to convert between them.
"""

import functools
import numbers

import numpy


@functools.total_ordering
class Length(object):
    """
    Base class for lengths.

    Parameters
    ----------
    value : number
        Magnitude of the length in the native scale of the subclass.
    """

    __slots__ = ("value",)

    def __init__(self, value=0.0):
        self.value = value

    def _same_kind(self, other):
        if type(other) is not type(self):
            raise TypeError(
                "[GDSFORGE] Cannot combine {0} with {1}.".format(
                    type(self).__name__, type(other).__name__
                )
            )

    def __repr__(self):
        return "{0}({1!r})".format(type(self).__name__, self.value)

    def __str__(self):
        return str(self.value)

    def __hash__(self):
        return hash((type(self), self.value))

    def __eq__(self, other):
        if not isinstance(other, Length):
            return NotImplemented
        return type(other) is type(self) and self.value == other.value

    def __lt__(self, other):
        if not isinstance(other, Length):
            return NotImplemented
        self._same_kind(other)
        return self.value < other.value

    def __add__(self, other):
        if not isinstance(other, Length):
            return NotImplemented
        self._same_kind(other)
        return type(self)(self.value + other.value)

    def __sub__(self, other):
        if not isinstance(other, Length):
            return NotImplemented
        self._same_kind(other)
        return type(self)(self.value - other.value)

    def __neg__(self):
        return type(self)(-self.value)

    def __pos__(self):
        return type(self)(self.value)

    def __abs__(self):
        return type(self)(abs(self.value))

    def __mul__(self, other):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return type(self)(self.value * other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Length):
            self._same_kind(other)
            return self.value / other.value
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return type(self)(self.value / other)

    def is_zero(self):
        return self.value == 0


class AbsoluteLength(Length):
    """
    Physical length.  The value is stored in micrometers.
    """

    __slots__ = ()


class RelativeLength(Length):
    """
    Length expressed directly in database units.
    """

    __slots__ = ()


NANOMETER = AbsoluteLength(1e-3)
MICROMETER = AbsoluteLength(1e0)
MILLIMETER = AbsoluteLength(1e3)
CENTIMETER = AbsoluteLength(1e4)
METER = AbsoluteLength(1e6)

DBU = RelativeLength(1)


def zero(kind=AbsoluteLength):
    """Zero length of the given kind."""
    return kind(0.0)


def to_relative(length, database_unit):
    """
    Express an absolute length in database units.

    Parameters
    ----------
    length : `AbsoluteLength`
        Length to be converted.
    database_unit : `AbsoluteLength`
        Physical size of one database unit.

    Returns
    -------
    out : `RelativeLength`
    """
    if not isinstance(length, AbsoluteLength):
        raise TypeError("[GDSFORGE] Only absolute lengths can be made relative.")
    return RelativeLength(length / database_unit)


def to_absolute(length, database_unit):
    """
    Express a length in database units as a physical length.

    Parameters
    ----------
    length : `RelativeLength`
        Length to be converted.
    database_unit : `AbsoluteLength`
        Physical size of one database unit.

    Returns
    -------
    out : `AbsoluteLength`
    """
    if not isinstance(length, RelativeLength):
        raise TypeError("[GDSFORGE] Only relative lengths can be made absolute.")
    return database_unit * length.value


@functools.total_ordering
class Angle(object):
    """
    Plane angle, stored in radians.

    Use `Angle.from_deg` or `Angle.from_rad` to create instances.
    """

    __slots__ = ("_rad",)

    def __init__(self, rad=0.0):
        self._rad = rad

    @classmethod
    def from_rad(cls, rad):
        return cls(rad)

    @classmethod
    def from_deg(cls, deg):
        return cls(deg / 180.0 * numpy.pi)

    def to_rad(self):
        return self._rad

    def to_deg(self):
        return self._rad / numpy.pi * 180.0

    def cos(self):
        return numpy.cos(self._rad)

    def sin(self):
        return numpy.sin(self._rad)

    def __repr__(self):
        return "Angle({0!r})".format(self._rad)

    def __str__(self):
        return "{0}rad".format(self._rad)

    def __hash__(self):
        return hash(self._rad)

    def __eq__(self, other):
        if not isinstance(other, Angle):
            return NotImplemented
        return self._rad == other._rad

    def __lt__(self, other):
        if not isinstance(other, Angle):
            return NotImplemented
        return self._rad < other._rad

    def __add__(self, other):
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self._rad + other._rad)

    def __sub__(self, other):
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self._rad - other._rad)

    def __neg__(self):
        return Angle(-self._rad)

    def __mul__(self, other):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return Angle(self._rad * other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Angle):
            return self._rad / other._rad
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return Angle(self._rad / other)


class Coordinate(object):
    """
    Point in the plane.

    Parameters
    ----------
    x : `Length`
        First component.
    y : `Length`
        Second component.  Must be of the same kind as `x`.
    """

    __slots__ = ("x", "y")

    def __init__(self, x, y):
        if not isinstance(x, Length) or type(x) is not type(y):
            raise TypeError(
                "[GDSFORGE] Coordinate components must be lengths of the same "
                "kind, got {0} and {1}.".format(type(x).__name__, type(y).__name__)
            )
        self.x = x
        self.y = y

    @classmethod
    def zero(cls, kind=AbsoluteLength):
        return cls(kind(0.0), kind(0.0))

    @property
    def kind(self):
        return type(self.x)

    def __repr__(self):
        return "Coordinate({0!r}, {1!r})".format(self.x, self.y)

    def __str__(self):
        return "({0}, {1})".format(self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __len__(self):
        return 2

    def __getitem__(self, index):
        return (self.x, self.y)[index]

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __add__(self, other):
        other = as_coordinate(other)
        return Coordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        other = as_coordinate(other)
        return Coordinate(self.x - other.x, self.y - other.y)

    def __neg__(self):
        return Coordinate(-self.x, -self.y)


def as_coordinate(point):
    """Accept a `Coordinate` or a pair of lengths."""
    if isinstance(point, Coordinate):
        return point
    x, y = point
    return Coordinate(x, y)


def coordinate_values(points):
    """
    Materialize a sequence of coordinates.

    Parameters
    ----------
    points : iterable of `Coordinate` or pairs of `Length`
        Points to be materialized.  All components must be of the same
        length kind.

    Returns
    -------
    out : 2-tuple
        Numpy array with shape (N, 2) holding the length values and the
        length kind (None for an empty sequence).
    """
    kind = None
    values = []
    for point in points:
        c = as_coordinate(point)
        if kind is None:
            kind = c.kind
        elif c.kind is not kind:
            raise TypeError(
                "[GDSFORGE] Cannot mix {0} and {1} in the same point "
                "list.".format(kind.__name__, c.kind.__name__)
            )
        values.append((c.x.value, c.y.value))
    if len(values) == 0:
        return numpy.empty((0, 2)), kind
    return numpy.array(values, dtype=float), kind
