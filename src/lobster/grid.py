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

import numpy as np
import numpy.typing as npt

from .lobster_base import GridError, lobsterBase

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]


class RectilinearGrid(lobsterBase):
    """A minimal rectilinear grid with cell centres and faces.

    This is the subset of a host grid that LOBSTER needs to allocate
    PAR and sinking velocity fields. The vertical coordinate points up,
    with the surface at z = 0 and the floor at z = -Lz. Index 0 is the
    bottom cell, index Nz - 1 the top cell.

    Example::

        RectilinearGrid(size=(1, 1, 50), extent=(1, 1, 200))

        # stretched vertical grid from explicit face positions
        RectilinearGrid(size=(4, 4, 3), extent=(10, 10), z=[-100, -30, -10, 0])

    Required keywords:
        size: tuple of (Nx, Ny, Nz)

    Optional keywords:
        extent: (Lx, Ly, Lz) in m, or (Lx, Ly) when z is given
        z: sequence of Nz + 1 face positions, increasing upward
    """

    def __init__(self, **kwargs) -> None:
        self.defaults: dict[str, list[tp.Any, tuple]] = {
            "size": [(1, 1, 1), (tuple, list)],
            "extent": [(1.0, 1.0, 1.0), (tuple, list)],
            "z": ["None", (tuple, list, np.ndarray)],
        }
        self.lrk: list = ["size"]
        self.__initialize_keyword_variables__(kwargs)

        if len(self.size) != 3 or any(int(n) < 1 for n in self.size):
            raise GridError(f"size must hold three positive integers, not {self.size}")
        self.Nx, self.Ny, self.Nz = (int(n) for n in self.size)

        if isinstance(self.z, str):
            if len(self.extent) != 3:
                raise GridError("extent must be (Lx, Ly, Lz) without explicit z faces")
            self.Lx, self.Ly, self.Lz = (float(e) for e in self.extent)
            self.zfaces: NDArrayFloat = np.linspace(-self.Lz, 0.0, self.Nz + 1)
        else:
            zfaces = np.asarray(self.z, dtype=float)
            if zfaces.shape != (self.Nz + 1,) or np.any(np.diff(zfaces) <= 0):
                raise GridError(
                    f"z must hold {self.Nz + 1} strictly increasing face positions"
                )
            self.Lx, self.Ly = (float(e) for e in self.extent[:2])
            self.Lz = float(zfaces[-1] - zfaces[0])
            self.zfaces = zfaces

        if self.Lx <= 0 or self.Ly <= 0 or self.Lz <= 0:
            raise GridError("grid extents must be positive")

        self.xfaces: NDArrayFloat = np.linspace(0.0, self.Lx, self.Nx + 1)
        self.yfaces: NDArrayFloat = np.linspace(0.0, self.Ly, self.Ny + 1)
        self.xnodes: NDArrayFloat = 0.5 * (self.xfaces[1:] + self.xfaces[:-1])
        self.ynodes: NDArrayFloat = 0.5 * (self.yfaces[1:] + self.yfaces[:-1])
        self.znodes: NDArrayFloat = 0.5 * (self.zfaces[1:] + self.zfaces[:-1])
        self.dz: NDArrayFloat = np.diff(self.zfaces)

        logging.debug(f"created {self.Nx}x{self.Ny}x{self.Nz} grid, Lz = {self.Lz}")

    @property
    def shape(self) -> tuple[int, int, int]:
        """Shape of a field on cell centres."""
        return (self.Nx, self.Ny, self.Nz)

    @property
    def bottom(self) -> float:
        """Depth of the domain floor."""
        return float(self.zfaces[0])

    @property
    def surface(self) -> float:
        return float(self.zfaces[-1])

    def face_shape(self, direction: str) -> tuple[int, int, int]:
        """Shape of a field on the x, y or z faces."""
        if direction == "x":
            return (self.Nx + 1, self.Ny, self.Nz)
        elif direction == "y":
            return (self.Nx, self.Ny + 1, self.Nz)
        elif direction == "z":
            return (self.Nx, self.Ny, self.Nz + 1)
        raise GridError(f"unknown direction '{direction}'")

    def volumes(self) -> NDArrayFloat:
        """Cell volumes in m**3, shape (Nx, Ny, Nz)."""
        dx = self.Lx / self.Nx
        dy = self.Ly / self.Ny
        return np.broadcast_to(dx * dy * self.dz, self.shape).copy()
