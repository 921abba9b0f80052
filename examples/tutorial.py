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
import gdsforge
from gdsforge import MICROMETER, NANOMETER, Angle

logging.basicConfig(level=logging.INFO)

print("Using gdsforge module version " + gdsforge.__version__)


def um(x, y):
    return (MICROMETER * x, MICROMETER * y)


# ------------------------------------------------------------------ #
#      POLYGONS AND PATHS
# ------------------------------------------------------------------ #

# Polygon vertices are lengths.  The last point repeats the first one.
points = [um(0, 0), um(2, 2), um(2, 6), um(-6, 6), um(-6, -6), um(-4, -4), um(-4, 4)]
points.append(points[0])

unit = gdsforge.Cell("UNIT")
unit.push(gdsforge.Polygon(points, 1))

# Paths are written as open polylines with an optional width.
unit.push(gdsforge.Path([um(-8, -8), um(8, -8), um(8, 8)], 2, 0, MICROMETER * 0.5))


# ------------------------------------------------------------------ #
#      LARGE POLYGONS
# ------------------------------------------------------------------ #

# A circle with 20000 vertices does not fit in a single GDSII record.
# It is split automatically when written (watch the log messages).
t = numpy.linspace(0, 2 * numpy.pi, 20000, endpoint=False)
circle = [um(50 * numpy.cos(a), 50 * numpy.sin(a)) for a in t]
circle.append(circle[0])
big = gdsforge.Cell("BIG_CIRCLE").push(gdsforge.Polygon(circle, 3))


# ------------------------------------------------------------------ #
#      REFERENCES
# ------------------------------------------------------------------ #

# Turning a cell into a reference freezes it.  The same cell can be
# referenced many times and is still written only once.
pair = gdsforge.Cell("PAIR")
pair.push(unit.into_ref(um(-10, 0)))
pair.push(unit.into_ref(um(10, 0), gdsforge.Decorator(Angle.from_deg(180))))

# Arrays repeat a cell on a grid of 3 rows and 4 columns.
top = gdsforge.Cell("TOP")
top.push(pair.into_array_ref(um(0, 0), 3, um(0, 90), 4, um(160, 0)))
top.push(big.into_ref(um(-100, 0)))


# ------------------------------------------------------------------ #
#      OUTPUT
# ------------------------------------------------------------------ #

# Only the top cell is needed: all dependencies travel with it.
lib = gdsforge.Library("tutorial", database_unit=NANOMETER, user_unit=MICROMETER)
lib.push(top)
lib.save("tutorial.gds")

print("Units: {} {}".format(*gdsforge.get_gds_units("tutorial.gds")))
for name, elements in gdsforge.read_structures("tutorial.gds"):
    print("{}: {} elements".format(name, len(elements)))
