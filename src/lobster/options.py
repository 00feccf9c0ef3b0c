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

import typing as tp
from enum import Enum

from .carbonate_chemistry import CARBONATE_SYSTEM
from .core import NITROGEN_CYCLE
from .oxygen_chemistry import OXYGEN_CHEMISTRY


class ChemistryOptions(Enum):
    """The four tracer sets of LOBSTER, keyed by (carbonates, oxygen).

    The option is resolved once when the model is built. The tracer
    list and the table of rate kernels follow from it, so the per-cell
    code never looks at the switches.

    Example::

        ChemistryOptions.from_flags(carbonates=True, oxygen=False).tracers
        # ('NO₃', 'NH₄', 'P', 'Z', 'D', 'DD', 'Dᶜ', 'DDᶜ', 'DOM', 'DIC', 'ALK')
    """

    NONE = (False, False)
    CARBONATES = (True, False)
    OXYGEN = (False, True)
    BOTH = (True, True)

    @classmethod
    def from_flags(cls, carbonates: bool = False, oxygen: bool = False) -> ChemistryOptions:
        return cls((bool(carbonates), bool(oxygen)))

    @property
    def carbonates(self) -> bool:
        return self.value[0]

    @property
    def oxygen(self) -> bool:
        return self.value[1]

    def rate_functions(self) -> dict[str, tp.Callable]:
        """Map each tracer of this option to its rate kernel, in tracer order."""
        rates = dict(NITROGEN_CYCLE)
        if self.carbonates:
            rates.update(CARBONATE_SYSTEM)
        if self.oxygen:
            rates.update(OXYGEN_CHEMISTRY)
        return rates

    @property
    def tracers(self) -> tuple[str, ...]:
        return tuple(self.rate_functions())
