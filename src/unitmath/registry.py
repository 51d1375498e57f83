"""Registry of named units loaded from definition lines."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence

from . import config
from .errors import UnitDefinitionError, UnitRegistryError
from .observability import log_event
from .parser.unit_parser import evaluate_expression, parse_line
from .units.algebra import UnitNode

logger = logging.getLogger(__name__)


DEFAULT_LINES: Sequence[str] = (
    "",
    "kg",
    "m",
    "s",
    "A",
    "K",
    "mol",
    "Hz = 1/s",
    "N = kg*m/s^2",
    "J = N*m",
    "W = J/s",
    "C = A*s",
    "V = W/A",
    "F = C/V",
    "Ω = V/A",
    "Wb = J/A",
    "S = 1/Ω",
    "Pa = N/(m^2)",
    "Pas = Pa*s",
)


class UnitRegistry(Mapping[str, UnitNode]):
    """Symbol table mapping unit symbols to their trees.

    Definitions are loaded in a single pass, so a line may reference units
    defined on earlier lines only. Writes are serialised with a lock and
    parsing works on a :meth:`snapshot` so a concurrent load is never seen
    half applied.
    """

    def __init__(self, units: Optional[Mapping[str, UnitNode]] = None) -> None:
        self._units: Dict[str, UnitNode] = dict(units or {})
        self._lock = threading.Lock()

    @classmethod
    def default(cls, *, include_env: bool = True) -> UnitRegistry:
        """Build a registry with the SI base and derived units.

        When ``include_env`` is set and ``UNITMATH_DEFINITIONS`` names a file,
        its lines are loaded after the defaults.
        """

        registry = cls()
        registry.load_lines(DEFAULT_LINES)
        if include_env and config.DEFINITIONS_PATH is not None:
            registry.load_file(config.DEFINITIONS_PATH)
        return registry

    # -- Mapping ----------------------------------------------------------
    def __getitem__(self, symbol: str) -> UnitNode:
        return self._units[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._units)

    def resolve(self, symbol: str) -> Optional[UnitNode]:
        return self._units.get(symbol)

    def snapshot(self) -> Mapping[str, UnitNode]:
        with self._lock:
            return MappingProxyType(dict(self._units))

    def copy(self) -> UnitRegistry:
        return type(self)(self.snapshot())

    # -- Loading ----------------------------------------------------------
    def register(self, unit: UnitNode) -> UnitNode:
        """Store ``unit`` under its symbol.

        Registering a unit equal to the stored one is a no-op; a different
        unit under an existing symbol raises :class:`UnitRegistryError`.
        """

        with self._lock:
            return _store(self._units, unit)

    def load_lines(self, lines: Iterable[str]) -> int:
        """Parse and register each line, returning the number of lines read.

        Lines are staged against a copy of the table and published together.
        A malformed or conflicting line aborts the load and leaves the
        registry unchanged.
        """

        count = 0
        with self._lock:
            staged = dict(self._units)
            lookup = MappingProxyType(staged)
            for line_no, line in enumerate(lines, start=1):
                line = line.rstrip("\r\n")
                try:
                    unit = parse_line(line, lookup)
                except UnitDefinitionError as exc:
                    raise UnitDefinitionError(
                        exc.message, exc.text, exc.position, line_no=line_no
                    ) from exc
                _store(staged, unit)
                count += 1
            self._units = staged
        log_event("units.loaded", lines=count, total=len(staged))
        return count

    def load_file(self, path: str | Path) -> int:
        path = Path(path)
        logger.info("Loading unit definitions from %s", path)
        return self.load_lines(path.read_text(encoding="utf-8").splitlines())

    # -- Parsing helpers --------------------------------------------------
    def parse_line(self, line: str) -> UnitNode:
        return parse_line(line, self.snapshot())

    def evaluate(self, expression: str) -> UnitNode:
        return evaluate_expression(expression, self.snapshot())


def _store(units: Dict[str, UnitNode], unit: UnitNode) -> UnitNode:
    current = units.get(unit.symbol)
    if current is not None:
        if current == unit:
            return current
        raise UnitRegistryError(f"Unit '{unit.symbol}' is already defined as '{current}'")
    units[unit.symbol] = unit
    logger.debug("Registered unit '%s'", unit.symbol)
    return unit


__all__ = ["DEFAULT_LINES", "UnitRegistry"]
