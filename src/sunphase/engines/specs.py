"""
sunphase.engines.specs
----------------------
Pure data: every numeric constant of the solar model, bundled in a frozen
SolarModelSpec so engines can be built from (and compared by) their spec.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict


# ============================================================
# HORIZON THRESHOLDS (cosine of the zenith angle)
# ============================================================

COS_HORIZON = -0.0145381       # cos(90.833 deg): refraction + solar radius
COS_CIVIL = -0.1045285         # cos(96 deg)
COS_NAUTICAL = -0.2079117      # cos(102 deg)
COS_ASTRONOMICAL = -0.309017   # cos(108 deg)


# ============================================================
# CORRECTIONS
# ============================================================

# Horizon raise per meter of observer altitude (degrees)
ALTITUDE_COEFF = 2.076e-4

# Empirical low-elevation refraction: c / tan(h + a / (h + b)), degrees
REFRACTION_COEFF = 0.0167
REFRACTION_A = 10.3
REFRACTION_B = 5.11
REFRACTION_FLOOR_DEG = -1.0


# ============================================================
# CACHE EPSILONS
# ============================================================

ANGLE_EPS_RAD = 1e-8
ALTITUDE_EPS_M = 1e-2


@dataclass(frozen=True)
class SolarModelSpec:
    name: str = "noaa"

    cos_horizon: float = COS_HORIZON
    cos_civil: float = COS_CIVIL
    cos_nautical: float = COS_NAUTICAL
    cos_astronomical: float = COS_ASTRONOMICAL

    altitude_coeff: float = ALTITUDE_COEFF

    refraction_coeff: float = REFRACTION_COEFF
    refraction_a: float = REFRACTION_A
    refraction_b: float = REFRACTION_B
    refraction_floor_deg: float = REFRACTION_FLOOR_DEG

    angle_eps_rad: float = ANGLE_EPS_RAD
    altitude_eps_m: float = ALTITUDE_EPS_M

    def __post_init__(self):
        # Floor must stay above the pole of a / (h + b)
        if self.refraction_floor_deg <= -self.refraction_b:
            raise ValueError("refraction_floor_deg must be above -refraction_b")
        if self.angle_eps_rad < 0 or self.altitude_eps_m < 0:
            raise ValueError("cache epsilons must be non-negative")

    @staticmethod
    def like(name: str) -> "SolarModelSpec":
        if name not in SPECS:
            raise KeyError(f"Unknown solar model spec '{name}'. Available: {sorted(SPECS)}")
        return SPECS[name]

    def tweak(self, **kwargs) -> "SolarModelSpec":
        return replace(self, **kwargs)


DEFAULT_SPEC = SolarModelSpec()

# Geometric horizon, no refraction: useful to compare against spherical-only models
GEOMETRIC_SPEC = DEFAULT_SPEC.tweak(name="geometric", cos_horizon=0.0, refraction_coeff=0.0)

SPECS: Dict[str, SolarModelSpec] = {
    DEFAULT_SPEC.name: DEFAULT_SPEC,
    GEOMETRIC_SPEC.name: GEOMETRIC_SPEC,
}
