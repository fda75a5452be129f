"""Engine configuration — tessellation tolerance and clock contract policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mandala.config import Settings

# Curve flattening error bound used when nothing else is configured
DEFAULT_TOLERANCE = 0.01

# Duration of a static pose clock. Any small positive value works: the clock
# starts and ends at the same value.
FIXED_DURATION = 0.1


@dataclass
class MandalaConfig:
    """Controls tessellation accuracy and how clock contract violations are handled."""

    # Curve flattening error bound (same units as the petal outline)
    tolerance: float = DEFAULT_TOLERANCE

    # True: raise ContractViolation. False: clamp backdated times to 0% and
    # ignore non-finite targets.
    strict_contracts: bool = True

    # Duration used for fixed (non-animated) clocks
    fixed_duration: float = FIXED_DURATION

    @classmethod
    def from_settings(cls, settings: Settings) -> MandalaConfig:
        return cls(
            tolerance=settings.mandala_tolerance,
            strict_contracts=settings.mandala_strict_contracts,
        )
