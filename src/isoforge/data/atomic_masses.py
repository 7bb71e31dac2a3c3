"""
Standard atomic weights and the atomic-mass registry.

Masses are planning-grade standard atomic weights (amu), not isotopic
masses. Unknown symbols resolve to a documented 100 amu placeholder; the
substitution is reported both as a :class:`~isoforge.errors.PhysicsWarning`
and on the returned :class:`MassLookup`, so callers can tell a real value
from the placeholder.
"""

from __future__ import annotations

import logging
import re
import warnings
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from isoforge.errors import InvalidParameterError, PhysicsWarning, require_positive

logger = logging.getLogger(__name__)

FALLBACK_ATOMIC_MASS_AMU = 100.0

STANDARD_ATOMIC_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "H": 1.00794, "He": 4.0026, "Li": 6.94, "Be": 9.0122, "B": 10.81,
    "C": 12.011, "N": 14.007, "O": 15.999, "F": 18.998, "Ne": 20.180,
    "Na": 22.990, "Mg": 24.305, "Al": 26.982, "Si": 28.085, "P": 30.974,
    "S": 32.06, "Cl": 35.45, "Ar": 39.948, "K": 39.098, "Ca": 40.078,
    "Sc": 44.955908, "Ti": 47.867, "V": 50.942, "Cr": 51.996, "Mn": 54.938,
    "Fe": 55.845, "Co": 58.933194, "Ni": 58.6934, "Cu": 63.546, "Zn": 65.38,
    "Ga": 69.723, "Ge": 72.63, "As": 74.922, "Se": 78.971, "Br": 79.904,
    "Kr": 83.798, "Rb": 85.468, "Sr": 87.62, "Y": 88.906, "Zr": 91.224,
    "Nb": 92.906, "Mo": 95.95, "Tc": 98.0, "Ru": 101.07, "Rh": 102.91,
    "Pd": 106.42, "Ag": 107.87, "Cd": 112.41, "In": 114.818, "Sn": 118.710,
    "Sb": 121.76, "Te": 127.60, "I": 126.90, "Xe": 131.29, "Cs": 132.91,
    "Ba": 137.33, "La": 138.91, "Ce": 140.12, "Pr": 140.91, "Nd": 144.24,
    "Pm": 145.0, "Sm": 150.36, "Eu": 151.96, "Gd": 157.25, "Tb": 158.93,
    "Dy": 162.500, "Ho": 164.93033, "Er": 167.26, "Tm": 168.93422, "Yb": 173.05,
    "Lu": 174.9668, "Hf": 178.49, "Ta": 180.95, "W": 183.84, "Re": 186.207,
    "Os": 190.23, "Ir": 192.217, "Pt": 195.084, "Au": 196.966569, "Hg": 200.59,
    "Tl": 204.3833, "Pb": 207.2, "Bi": 208.98040, "Po": 209.0, "At": 210.0,
    "Rn": 222.0, "Fr": 223.0, "Ra": 226.0, "Ac": 227.0, "Th": 232.0377,
    "Pa": 231.04, "U": 238.02891, "Np": 237.0, "Pu": 244.0, "Am": 243.0,
})

_SYMBOL_RE = re.compile(r"^([A-Z][a-z]?)")
_ISOTOPE_RE = re.compile(r"^([A-Z][a-z]?)-?(\d+)(m\d*)?$")
_FORMULA_TOKEN_RE = re.compile(r"([A-Z][a-z]?)(\d*)")


@dataclass(frozen=True)
class MassLookup:
    """Result of an atomic-mass lookup.

    ``found`` is False when ``mass_amu`` is the placeholder value.
    """

    symbol: str
    mass_amu: float
    found: bool

    @property
    def is_fallback(self) -> bool:
        return not self.found


def element_symbol(isotope: str) -> Optional[str]:
    """Element symbol of an isotope string: ``'Lu-177'`` -> ``'Lu'``.

    Returns None when the string does not start with a symbol.
    """
    if not isinstance(isotope, str):
        return None
    match = _SYMBOL_RE.match(isotope.strip())
    return match.group(1) if match else None


def parse_isotope(name: str) -> Tuple[str, int, int]:
    """
    Parse an isotope name such as ``'Lu-177'``, ``'Tc99m'`` or ``'Mo100'``.

    Returns
    -------
    tuple
        (element_symbol, mass_number, isomeric_state)
    """
    match = _ISOTOPE_RE.match(name.strip())
    if not match:
        raise InvalidParameterError(f"Cannot parse isotope name: {name!r}")

    element = match.group(1)
    mass = int(match.group(2))
    isomeric = match.group(3) or ""
    if isomeric in ("m", "m1"):
        iso_state = 1
    elif isomeric == "m2":
        iso_state = 2
    else:
        iso_state = 0
    return element, mass, iso_state


class AtomicMassRegistry(Mapping[str, float]):
    """
    Read-only mapping of element symbol to standard atomic weight (amu).

    The registry is built once and handed to whatever needs it; there is
    no module-level mutable table. Build a synthetic registry for tests by
    passing a plain dict.

    Parameters
    ----------
    masses : Mapping[str, float], optional
        Symbol -> amu table; defaults to :data:`STANDARD_ATOMIC_WEIGHTS`.
    fallback_amu : float
        Value substituted for unknown symbols.
    """

    def __init__(
        self,
        masses: Optional[Mapping[str, float]] = None,
        fallback_amu: float = FALLBACK_ATOMIC_MASS_AMU,
    ):
        table = dict(STANDARD_ATOMIC_WEIGHTS if masses is None else masses)
        for symbol, value in table.items():
            require_positive(**{f"atomic_mass[{symbol}]": value})
        require_positive(fallback_amu=fallback_amu)
        self._masses: Mapping[str, float] = MappingProxyType(table)
        self.fallback_amu = fallback_amu

    def __getitem__(self, symbol: str) -> float:
        return self._masses[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._masses)

    def __len__(self) -> int:
        return len(self._masses)

    def __repr__(self) -> str:
        return f"AtomicMassRegistry({len(self)} elements, fallback={self.fallback_amu} amu)"

    def lookup(self, symbol: Optional[str]) -> MassLookup:
        """Atomic mass for ``symbol``, or the placeholder with ``found=False``.

        A missing symbol also emits a :class:`PhysicsWarning`.
        """
        key = symbol or ""
        if key in self._masses:
            return MassLookup(symbol=key, mass_amu=self._masses[key], found=True)

        message = (
            f"Atomic mass not found for element '{key}'; using placeholder "
            f"{self.fallback_amu} amu. Results are a planning approximation."
        )
        logger.warning(message)
        warnings.warn(message, PhysicsWarning, stacklevel=2)
        return MassLookup(symbol=key, mass_amu=self.fallback_amu, found=False)

    def lookup_isotope(self, isotope: str) -> MassLookup:
        """Look up the element of an isotope string such as ``'Zn-68'``."""
        return self.lookup(element_symbol(isotope))

    def compound_mass_per_atom(self, formula: str, element: str) -> MassLookup:
        """
        Compound mass carried per atom of ``element`` (amu).

        For ``Lu2O3`` and ``Lu`` this is M(Lu2O3) / 2, the amount of target
        material that has to be weighed out per Lu atom.

        Raises
        ------
        InvalidParameterError
            If the formula cannot be parsed or does not contain ``element``.
        """
        composition = parse_formula(formula)
        if element not in composition:
            raise InvalidParameterError(f"Element '{element}' not present in formula '{formula}'")

        total = 0.0
        found = True
        for symbol, count in composition.items():
            result = self.lookup(symbol)
            found = found and result.found
            total += result.mass_amu * count
        return MassLookup(symbol=formula, mass_amu=total / composition[element], found=found)


def parse_formula(formula: str) -> Dict[str, int]:
    """Element counts of a simple formula without parentheses: ``'MoO3'`` -> ``{'Mo': 1, 'O': 3}``."""
    compact = formula.replace(" ", "")
    tokens = _FORMULA_TOKEN_RE.findall(compact)
    if not compact or "".join(sym + num for sym, num in tokens) != compact:
        raise InvalidParameterError(f"Cannot parse chemical formula: {formula!r}")

    composition: Dict[str, int] = {}
    for symbol, number in tokens:
        composition[symbol] = composition.get(symbol, 0) + (int(number) if number else 1)
    return composition


DEFAULT_REGISTRY = AtomicMassRegistry()


__all__ = [
    "FALLBACK_ATOMIC_MASS_AMU",
    "STANDARD_ATOMIC_WEIGHTS",
    "MassLookup",
    "AtomicMassRegistry",
    "DEFAULT_REGISTRY",
    "element_symbol",
    "parse_isotope",
    "parse_formula",
]
