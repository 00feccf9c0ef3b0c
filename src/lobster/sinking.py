"""lobster: The LOBSTER ocean biogeochemistry model.

Copyright (C), 2024 The lobster developers

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""
from __future__ import annotations

import logging
import typing as tp
from collections import namedtuple
from collections.abc import Mapping

import numpy as np
import numpy.typing as npt

from .lobster_base import GridError, InputError
from .utility_functions import to_si

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]

VelocityField = namedtuple("VelocityField", ["u", "v", "w"])

DEFAULT_SINKING_VELOCITIES: dict[str, tuple] = {
    "D": (0.0, 0.0, -3.47e-5),
    "DD": (0.0, 0.0, "-200 m/day"),
}


def bottom_taper(grid, smoothing_distance: float = 2.0) -> NDArrayFloat:
    """Return a factor on the z faces that rises from 0 at the floor to ~1.

    tanh((z - z_bottom) / smoothing_distance), so a sinking velocity
    multiplied by it vanishes at the bottom face and tracers cannot
    leave the domain.
    """
    return np.tanh(np.maximum(grid.zfaces - grid.bottom, 0.0) / smoothing_distance)


def constant_velocity_field(
    speed: tp.Sequence, grid, open_bottom: bool, smoothing_distance: float = 2.0
) -> VelocityField:
    """Build face fields from a constant (u, v, w) in m/s.

    Components may be numbers or pint strings/quantities, e.g.
    (0, 0, "-200 m/day").
    """
    u, v, w = (to_si(c, "m/s") for c in speed)

    w_profile = np.full(grid.Nz + 1, w)
    if open_bottom:
        w_profile = w_profile * bottom_taper(grid, smoothing_distance)

    return VelocityField(
        u=np.full(grid.face_shape("x"), u),
        v=np.full(grid.face_shape("y"), v),
        w=np.broadcast_to(w_profile, grid.face_shape("z")).copy(),
    )


def field_velocity_field(fields, grid) -> VelocityField:
    """Check spatially varying u, v, w against the face shapes of grid."""
    if isinstance(fields, Mapping):
        try:
            fields = (fields["u"], fields["v"], fields["w"])
        except KeyError as err:
            raise InputError(f"velocity fields need u, v and w, missing {err}") from err

    checked = []
    for component, field, direction in zip("uvw", fields, "xyz"):
        field = np.asarray(field, dtype=float)
        if field.shape != grid.face_shape(direction):
            raise GridError(
                f"{component} has shape {field.shape}, "
                f"expected {grid.face_shape(direction)}"
            )
        checked.append(field)

    return VelocityField(*checked)


def setup_velocity_fields(
    drift_speeds: Mapping,
    grid,
    open_bottom: bool,
    smoothing_distance: float = 2.0,
) -> dict[str, VelocityField]:
    """Turn user supplied sinking speeds into velocity fields on grid.

    Parameters
    ----------
    drift_speeds : Mapping
        tracer name -> either a constant (u, v, w), or the spatially varying
        fields as a VelocityField, a (u, v, w) tuple of arrays, or a dict
        with u, v and w keys
    grid : RectilinearGrid
        any grid that provides Nx, Ny, Nz, zfaces, bottom and face_shape()
    open_bottom : bool
        taper constant sinking speeds to zero at the floor
    smoothing_distance : float
        length scale of the taper in m

    Raises
    ------
    InputError
        if a speed is neither three numbers nor three fields
    """
    for attribute in ("Nx", "Ny", "Nz", "zfaces", "bottom", "face_shape"):
        if not hasattr(grid, attribute):
            raise GridError(f"grid {grid} lacks '{attribute}'")

    velocities: dict[str, VelocityField] = {}
    for name, speed in drift_speeds.items():
        if isinstance(speed, Mapping | VelocityField):
            velocities[name] = field_velocity_field(speed, grid)
        elif isinstance(speed, tuple | list) and len(speed) == 3:
            if all(isinstance(c, np.ndarray) for c in speed):
                velocities[name] = field_velocity_field(speed, grid)
            else:
                velocities[name] = constant_velocity_field(
                    speed, grid, open_bottom, smoothing_distance
                )
        else:
            raise InputError(
                f"sinking velocity of {name} must be (u, v, w) or three fields, "
                f"not {speed}"
            )
        logging.debug(f"{name} sinks at w = {velocities[name].w.min():.3e} m/s")

    return velocities
