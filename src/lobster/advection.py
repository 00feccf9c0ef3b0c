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


class AdvectionScheme:
    """Describes the scheme the host should use to move a sinking tracer.

    LOBSTER does not advect anything itself. The host reads the scheme
    through biogeochemical_advection_scheme() and picks its own
    implementation. The order and the halo size are what a host needs to
    allocate and select the stencil.
    """

    order: int = 2
    required_halo_size: int = 1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def __eq__(self, other) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(self.__class__.__name__)


class CenteredSecondOrder(AdvectionScheme):
    order = 2
    required_halo_size = 1


class UpwindBiasedFirstOrder(AdvectionScheme):
    order = 1
    required_halo_size = 1


class UpwindBiasedThirdOrder(AdvectionScheme):
    order = 3
    required_halo_size = 2


class WENO5(AdvectionScheme):
    """Fifth order weighted essentially non-oscillatory scheme."""

    order = 5
    required_halo_size = 3
