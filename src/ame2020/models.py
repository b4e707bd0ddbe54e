"""
Record types for the AME2020 mass table.

A ``Nuclide`` is built once from one data line by ``ame2020.parser`` and never
mutated afterwards. Measured quantities are ``Measurement`` values where a
missing number is ``None``, never a zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .config import Config

__all__ = [
    "Measurement",
    "Origin",
    "Nuclide",
]


@dataclass(frozen=True)
class Measurement:
    """
    A value with its uncertainty.

    Attributes:
        value: Central value, or None when the table gives the ``*`` placeholder.
        uncertainty: One-sigma uncertainty, or None when not given.
        estimated: True when the table marks the value with ``#``, i.e. it is
            derived from systematics rather than from experimental data.
    """

    value: float | None
    uncertainty: float | None = None
    estimated: bool = False

    @classmethod
    def absent(cls) -> "Measurement":
        return cls(value=None, uncertainty=None, estimated=False)

    @property
    def is_present(self) -> bool:
        return self.value is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "uncertainty": self.uncertainty,
            "estimated": self.estimated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Measurement":
        return cls(
            value=data.get("value"),
            uncertainty=data.get("uncertainty"),
            estimated=bool(data.get("estimated", False)),
        )


class Origin(str, Enum):
    """Provenance of a nuclide's mass value."""

    MEASURED = "measured"
    ESTIMATED = "estimated"


@dataclass(frozen=True)
class Nuclide:
    """
    One entry of the AME2020 mass table.

    Energies are in keV, atomic masses in micro-u (the integer part of the
    mass in u is folded in, so ``atomic_mass.value`` for the neutron is
    ``1008664.91590``).

    Attributes:
        neutron_number: N.
        proton_number: Z.
        mass_number: A, always equal to N + Z.
        element_symbol: Chemical symbol, always the canonical one for Z.
        origin: Whether the mass is measured or estimated.
        origin_code: Raw 'O' column (reaction or decay the mass comes from),
            e.g. ``"-n"``, ``"x"``; empty when not given.
        mass_excess: Mass excess (keV).
        binding_energy_per_a: Binding energy per nucleon (keV).
        beta_decay_mode: Raw beta-decay column, normally ``"B-"``.
        beta_decay_energy: Beta-decay energy (keV), absent when not calculable.
        atomic_mass: Atomic mass (micro-u).
    """

    neutron_number: int
    proton_number: int
    mass_number: int
    element_symbol: str
    origin: Origin
    origin_code: str
    mass_excess: Measurement
    binding_energy_per_a: Measurement
    beta_decay_mode: str
    beta_decay_energy: Measurement
    atomic_mass: Measurement

    @property
    def name(self) -> str:
        """Nuclide name like 'Fe-56'."""
        return f"{self.element_symbol}-{self.mass_number}"

    @property
    def is_estimated(self) -> bool:
        return self.origin is Origin.ESTIMATED

    @property
    def atomic_mass_u(self) -> float | None:
        """Atomic mass in u, or None if absent."""
        if self.atomic_mass.value is None:
            return None
        return self.atomic_mass.value * 1e-6

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a plain dict suitable for JSON encoding.

        Field names are stable; absent numbers are encoded as None.
        """
        return {
            "neutron_number": self.neutron_number,
            "proton_number": self.proton_number,
            "mass_number": self.mass_number,
            "element_symbol": self.element_symbol,
            "origin": self.origin.value,
            "origin_code": self.origin_code,
            "mass_excess": self.mass_excess.to_dict(),
            "binding_energy_per_a": self.binding_energy_per_a.to_dict(),
            "beta_decay_mode": self.beta_decay_mode,
            "beta_decay_energy": self.beta_decay_energy.to_dict(),
            "atomic_mass": self.atomic_mass.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Nuclide":
        """
        Rebuild a Nuclide from ``to_dict`` output.

        Raises:
            ValueError: If N or Z is negative, or the mass number or symbol is
                inconsistent with N and Z.
        """
        nuclide = cls(
            neutron_number=int(data["neutron_number"]),
            proton_number=int(data["proton_number"]),
            mass_number=int(data["mass_number"]),
            element_symbol=data["element_symbol"],
            origin=Origin(data["origin"]),
            origin_code=data.get("origin_code", ""),
            mass_excess=Measurement.from_dict(data["mass_excess"]),
            binding_energy_per_a=Measurement.from_dict(data["binding_energy_per_a"]),
            beta_decay_mode=data.get("beta_decay_mode", ""),
            beta_decay_energy=Measurement.from_dict(data["beta_decay_energy"]),
            atomic_mass=Measurement.from_dict(data["atomic_mass"]),
        )
        if nuclide.neutron_number < 0 or nuclide.proton_number < 0:
            raise ValueError(
                f"Inconsistent nuclide: negative count N={nuclide.neutron_number}, "
                f"Z={nuclide.proton_number}"
            )
        if nuclide.mass_number != nuclide.neutron_number + nuclide.proton_number:
            raise ValueError(
                f"Inconsistent nuclide: A={nuclide.mass_number} but "
                f"N+Z={nuclide.neutron_number + nuclide.proton_number}"
            )
        expected = Config.get_element_symbol(nuclide.proton_number)
        if nuclide.element_symbol != expected:
            raise ValueError(
                f"Inconsistent nuclide: symbol {nuclide.element_symbol!r} "
                f"does not match Z={nuclide.proton_number}"
            )
        return nuclide
