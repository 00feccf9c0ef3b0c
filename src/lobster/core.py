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

from math import exp

from numba import njit

"""
The LOBSTER nitrogen cycle. All pools are in mmol N/m**3, except the
detrital carbon pools Dc and DDc which are in mmol C/m**3.

Every tracer rate has the same signature

    rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p)

where p is the RateConstants namedtuple of lobster.parameters. Rates are
in mmol/m**3/s. Negative concentrations, which the host's transport
scheme may produce transiently, are treated as zero.
"""


@njit(fastmath=True)
def positive(c: float) -> float:
    return max(c, 0.0)


@njit(fastmath=True)
def light_limitation(PAR: float, k_PAR: float) -> float:
    """Saturating light limitation, zero in the dark."""
    PAR = positive(PAR)
    if PAR == 0.0:
        return 0.0
    return PAR / (PAR + k_PAR)


@njit(fastmath=True)
def nitrate_limitation(NO3: float, NH4: float, psi: float, k_NO3: float) -> float:
    """Nitrate limitation, inhibited by the presence of ammonia."""
    NO3 = positive(NO3)
    if NO3 == 0.0:
        return 0.0
    return NO3 * exp(-psi * positive(NH4)) / (NO3 + k_NO3)


@njit(fastmath=True)
def ammonia_limitation(NH4: float, k_NH4: float) -> float:
    NH4 = positive(NH4)
    if NH4 == 0.0:
        return 0.0
    return NH4 / (NH4 + k_NH4)


@njit(fastmath=True)
def phytoplankton_growth_rate(NO3: float, NH4: float, PAR: float, p) -> float:
    """Specific growth rate of phytoplankton in 1/s.

    The growth rate is limited by either light or nutrients,
    whichever is scarcer.
    """
    L_N = nitrate_limitation(
        NO3, NH4, p.nitrate_ammonia_inhibition, p.nitrate_half_saturation
    ) + ammonia_limitation(NH4, p.ammonia_half_saturation)
    L_PAR = light_limitation(PAR, p.light_half_saturation)
    return p.maximum_phytoplankton_growthrate * min(L_PAR, L_N)


@njit(fastmath=True)
def phytoplankton_production(NO3: float, NH4: float, P: float, PAR: float, p):
    """Primary production and the nitrate and ammonia uptake that supports it.

    Uptake is split in proportion to the nitrate and ammonia limitation
    terms, so that the two uptake fluxes add up to the production.

    :returns: production, nitrate uptake, ammonia uptake
    """
    L_NO3 = nitrate_limitation(
        NO3, NH4, p.nitrate_ammonia_inhibition, p.nitrate_half_saturation
    )
    L_NH4 = ammonia_limitation(NH4, p.ammonia_half_saturation)
    L_N = L_NO3 + L_NH4
    if L_N == 0.0:
        return 0.0, 0.0, 0.0

    production = phytoplankton_growth_rate(NO3, NH4, PAR, p) * positive(P)
    return production, production * L_NO3 / L_N, production * L_NH4 / L_N


@njit(fastmath=True)
def zooplankton_grazing(P: float, D: float, Dc: float, Z: float, p):
    """Grazing on phytoplankton and small detritus.

    Holling type II response, with the food items weighted by the
    phytoplankton preference.

    :returns: grazing on P, grazing on D, grazing on Dc
    """
    P = positive(P)
    D = positive(D)
    preference = p.phytoplankton_preference
    food = preference * P + (1.0 - preference) * D
    if food == 0.0:
        return 0.0, 0.0, 0.0

    rate = p.maximum_grazing_rate * positive(Z) / (p.grazing_half_saturation + food)
    return (
        rate * preference * P,
        rate * (1.0 - preference) * D,
        rate * (1.0 - preference) * positive(Dc),
    )


@njit(fastmath=True)
def plankton_mortality(P: float, Z: float, p) -> float:
    """Linear phytoplankton and quadratic zooplankton mortality."""
    Z = positive(Z)
    return p.phytoplankton_mortality * positive(P) + p.zooplankton_mortality * Z * Z


@njit(fastmath=True)
def ammonia_regeneration(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    """All ammonia sources: exudation, excretion, egestion and remineralisation."""
    production, _, _ = phytoplankton_production(NO3, NH4, P, PAR, p)
    grazing_P, grazing_D, _ = zooplankton_grazing(P, D, Dc, Z, p)
    egestion = (1.0 - p.zooplankton_assimilation_fraction) * (grazing_P + grazing_D)
    detritus = (
        p.small_detritus_remineralisation_rate * positive(D)
        + p.large_detritus_remineralisation_rate * positive(DD)
    )

    return (
        p.ammonia_fraction_of_exudate * p.phytoplankton_exudation_fraction * production
        + p.zooplankton_excretion_rate * positive(Z)
        + p.ammonia_fraction_of_excrement * egestion
        + p.ammonia_fraction_of_detritus * detritus
        + p.dissolved_organic_breakdown_rate * positive(DOM)
    )


@njit(fastmath=True)
def nitrate_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    _, nitrate_uptake, _ = phytoplankton_production(NO3, NH4, P, PAR, p)
    return p.nitrification_rate * positive(NH4) - nitrate_uptake


@njit(fastmath=True)
def ammonia_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    _, _, ammonia_uptake = phytoplankton_production(NO3, NH4, P, PAR, p)
    return (
        ammonia_regeneration(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p)
        - ammonia_uptake
        - p.nitrification_rate * positive(NH4)
    )


@njit(fastmath=True)
def phytoplankton_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    production, _, _ = phytoplankton_production(NO3, NH4, P, PAR, p)
    grazing_P, _, _ = zooplankton_grazing(P, D, Dc, Z, p)
    return (
        (1.0 - p.phytoplankton_exudation_fraction) * production
        - grazing_P
        - p.phytoplankton_mortality * positive(P)
    )


@njit(fastmath=True)
def zooplankton_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    grazing_P, grazing_D, _ = zooplankton_grazing(P, D, Dc, Z, p)
    Z = positive(Z)
    return (
        p.zooplankton_assimilation_fraction * (grazing_P + grazing_D)
        - p.zooplankton_mortality * Z * Z
        - p.zooplankton_excretion_rate * Z
    )


@njit(fastmath=True)
def small_detritus_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    grazing_P, grazing_D, _ = zooplankton_grazing(P, D, Dc, Z, p)
    egestion = (1.0 - p.zooplankton_assimilation_fraction) * (grazing_P + grazing_D)
    return (
        p.slow_sinking_mortality_fraction * plankton_mortality(P, Z, p)
        + (1.0 - p.ammonia_fraction_of_excrement) * egestion
        - grazing_D
        - p.small_detritus_remineralisation_rate * positive(D)
    )


@njit(fastmath=True)
def large_detritus_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    return (
        p.fast_sinking_mortality_fraction * plankton_mortality(P, Z, p)
        - p.large_detritus_remineralisation_rate * positive(DD)
    )


@njit(fastmath=True)
def small_detritus_carbon_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    grazing_P, _, grazing_Dc = zooplankton_grazing(P, D, Dc, Z, p)
    egested = (1.0 - p.zooplankton_assimilation_fraction) * (
        1.0 - p.ammonia_fraction_of_excrement
    )
    return (
        p.phytoplankton_redfield
        * (
            p.slow_sinking_mortality_fraction * plankton_mortality(P, Z, p)
            + egested * grazing_P
        )
        + egested * grazing_Dc
        - grazing_Dc
        - p.small_detritus_remineralisation_rate * positive(Dc)
    )


@njit(fastmath=True)
def large_detritus_carbon_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    return (
        p.phytoplankton_redfield
        * p.fast_sinking_mortality_fraction
        * plankton_mortality(P, Z, p)
        - p.large_detritus_remineralisation_rate * positive(DDc)
    )


@njit(fastmath=True)
def dissolved_organic_matter_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    production, _, _ = phytoplankton_production(NO3, NH4, P, PAR, p)
    detritus = (
        p.small_detritus_remineralisation_rate * positive(D)
        + p.large_detritus_remineralisation_rate * positive(DD)
    )
    unsorted_mortality = (
        1.0 - p.slow_sinking_mortality_fraction - p.fast_sinking_mortality_fraction
    )
    return (
        (1.0 - p.ammonia_fraction_of_exudate) * p.phytoplankton_exudation_fraction * production
        + (1.0 - p.ammonia_fraction_of_detritus) * detritus
        + unsorted_mortality * plankton_mortality(P, Z, p)
        - p.dissolved_organic_breakdown_rate * positive(DOM)
    )


# tracer name -> rate kernel, in the order the host sees the tracers
NITROGEN_CYCLE = {
    "NO₃": nitrate_rate,
    "NH₄": ammonia_rate,
    "P": phytoplankton_rate,
    "Z": zooplankton_rate,
    "D": small_detritus_rate,
    "DD": large_detritus_rate,
    "Dᶜ": small_detritus_carbon_rate,
    "DDᶜ": large_detritus_carbon_rate,
    "DOM": dissolved_organic_matter_rate,
}

# carbon companions share sinking and advection with their nitrogen pool
CARBON_COMPANIONS = {"Dᶜ": "D", "DDᶜ": "DD"}

NITROGEN_POOLS = ("NO₃", "NH₄", "P", "Z", "D", "DD", "DOM")
