"""lobster: The LOBSTER ocean biogeochemistry model.

Copyright (C), 2024 The lobster developers

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or (at
your option) any later version.

This program is distributed in the hope that it will be useful, but
WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""


from .initialize_unit_registry import Q_ as Q_, ureg as ureg
from .version import get_version as get_version
from .lobster_base import (
    GridError as GridError,
    InputError as InputError,
    KeywordError as KeywordError,
    MissingKeywordError as MissingKeywordError,
    SolverError as SolverError,
    TracerError as TracerError,
    lobsterBase as lobsterBase,
)
from .utility_functions import check_for_quantity as check_for_quantity, to_si as to_si
from .grid import RectilinearGrid as RectilinearGrid
from .parameters import LobsterParameters as LobsterParameters, RateConstants as RateConstants
from .options import ChemistryOptions as ChemistryOptions
from .light import (
    TwoBandPhotosyntheticallyActiveRadiation as TwoBandPhotosyntheticallyActiveRadiation,
)
from .advection import (
    AdvectionScheme as AdvectionScheme,
    CenteredSecondOrder as CenteredSecondOrder,
    UpwindBiasedFirstOrder as UpwindBiasedFirstOrder,
    UpwindBiasedThirdOrder as UpwindBiasedThirdOrder,
    WENO5 as WENO5,
)
from .sinking import VelocityField as VelocityField, setup_velocity_fields as setup_velocity_fields
from .biogeochemistry import (
    AbstractContinuousFormBiogeochemistry as AbstractContinuousFormBiogeochemistry,
    Clock as Clock,
    SimulationState as SimulationState,
)
from .model import LOBSTER as LOBSTER
from .box_model import BoxModel as BoxModel
