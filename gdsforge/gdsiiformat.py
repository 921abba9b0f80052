######################################################################
#                                                                    #
#  Copyright 2009 Lucas Heitzmann Gabrielli.                         #
#  This file is part of gdsforge, distributed under the terms of the #
#  Boost Software License - Version 1.0.  See the accompanying       #
#  LICENSE file or <http://www.boost.org/LICENSE_1_0.txt>            #
#                                                                    #
######################################################################
"""
Low level GDSII stream helpers: record encoding, 8-byte reals and the
coordinate quantizer.
"""

import struct
import numpy

from gdsforge.units import AbsoluteLength, RelativeLength
from gdsforge.error import CoordinateOverflowError

MAX_POINTS = 8191
"""
Maximal number of points in a single XY record (the record size is
limited to 65535 bytes).
"""

_int32_min = -(2 ** 31)
_int32_max = 2 ** 31 - 1


def _quantize(values, kind, database_unit):
    """
    Convert length values into integer database units.

    Parameters
    ----------
    values : array-like
        Length values (any shape).
    kind : `AbsoluteLength` or `RelativeLength` subclass
        Kind of the lengths in `values`.
    database_unit : `AbsoluteLength`
        Physical size of one database unit.

    Returns
    -------
    out : Numpy array
        Big-endian 32-bit integers with the same shape as `values`.
    """
    values = numpy.asarray(values, dtype=float)
    if kind is None or issubclass(kind, RelativeLength):
        scaled = numpy.round(values)
    elif issubclass(kind, AbsoluteLength):
        scaled = numpy.round(values / database_unit.value)
    else:
        raise TypeError("[GDSFORGE] Unknown length kind {0}.".format(kind))
    if scaled.size > 0 and not (
        numpy.isfinite(scaled).all()
        and scaled.min() >= _int32_min
        and scaled.max() <= _int32_max
    ):
        bad = scaled[
            ~numpy.isfinite(scaled) | (scaled < _int32_min) | (scaled > _int32_max)
        ]
        raise CoordinateOverflowError(
            "[GDSFORGE] Value {0} does not fit in a 32-bit GDSII "
            "coordinate.".format(bad.flat[0])
        )
    return scaled.astype(">i4")


def _quantize_length(length, database_unit):
    return int(_quantize(length.value, type(length), database_unit))


def _pack_string(rec_type, text):
    """Pack an ASCII string record, padded to an even length."""
    if len(text) % 2 != 0:
        text = text + "\0"
    return struct.pack(">2H", 4 + len(text), rec_type) + text.encode("ascii")


def _write_xy(outfile, xy):
    """Write an XY record for an array of integer points."""
    xy = numpy.asarray(xy, dtype=">i4")
    outfile.write(struct.pack(">2H", 4 + 4 * xy.size, 0x1003))
    outfile.write(xy.tobytes())


def _record_reader(stream):
    """
    Generator for complete records from a GDSII stream file.

    Parameters
    ----------
    stream : file
        GDSII stream file to be read.

    Returns
    -------
    out : list
        Record type and data (as a numpy.array, string or None)
    """
    while True:
        header = stream.read(4)
        if len(header) < 4:
            return
        size, rec_type = struct.unpack(">HH", header)
        data_type = rec_type & 0x00FF
        rec_type = rec_type // 256
        data = None
        if size > 4:
            payload = stream.read(size - 4)
            if data_type == 0x01:
                data = numpy.frombuffer(payload, dtype=">u2").astype(int)
            elif data_type == 0x02:
                data = numpy.frombuffer(payload, dtype=">i2").astype(int)
            elif data_type == 0x03:
                data = numpy.frombuffer(payload, dtype=">i4").astype(int)
            elif data_type == 0x05:
                data = numpy.array(
                    [
                        _eight_byte_real_to_float(payload[i : i + 8])
                        for i in range(0, len(payload), 8)
                    ]
                )
            else:
                if payload[-1] == 0:
                    payload = payload[:-1]
                data = payload.decode("ascii")
        yield [rec_type, data]


def _eight_byte_real(value):
    """
    Convert a number into the GDSII 8 byte real format.

    Parameters
    ----------
    value : number
        The number to be converted.

    Returns
    -------
    out : bytes
        The GDSII binary string that represents `value`.
    """
    if value == 0:
        return b"\x00\x00\x00\x00\x00\x00\x00\x00"
    if value < 0:
        byte1 = 0x80
        value = -value
    else:
        byte1 = 0x00
    fexp = numpy.log2(value) / 4
    exponent = int(numpy.ceil(fexp))
    if fexp == exponent:
        exponent += 1
    mantissa = int(value * 16.0 ** (14 - exponent))
    byte1 += exponent + 64
    byte2 = mantissa // 281474976710656
    short3 = (mantissa % 281474976710656) // 4294967296
    long4 = mantissa % 4294967296
    return struct.pack(">HHL", byte1 * 256 + byte2, short3, long4)


def _eight_byte_real_to_float(value):
    """
    Convert a number from GDSII 8 byte real format to float.

    Parameters
    ----------
    value : bytes
        The GDSII binary string representation of the number.

    Returns
    -------
    out : float
        The number represented by `value`.
    """
    short1, short2, long3 = struct.unpack(">HHL", value)
    exponent = (short1 & 0x7F00) // 256 - 64
    mantissa = (
        ((short1 & 0x00FF) * 65536 + short2) * 4294967296 + long3
    ) / 72057594037927936.0
    if short1 & 0x8000:
        return -mantissa * 16.0 ** exponent
    return mantissa * 16.0 ** exponent
