"""
BuildSiteCatalog — precomputed candidate tiles for 3x3 structures.

Design philosophy
-----------------
Asking the simulation "is this area buildable?" for every tile of the map
is too slow to do on every build request, so it is done once at round
start. Every structure shares the same 3x3 footprint, so a single catalog,
computed with the BASE footprint, serves base, barracks and refinery
placement alike.

The catalog is a candidate list, not a reservation system. A tile that was
free at round start may be covered by the time a build handler looks at it,
so nearest() re-asks the simulation about each site for the *specific*
structure type at call time. Nothing is removed from the catalog on use.

Storage
-------
Sites are kept as an (N, 2) int array in row-major scan order (x outer,
y inner). nearest() computes squared distances for the whole catalog in one
vectorised pass and relies on np.argmin returning the first minimum, which
makes the tie-break "first site in catalog order wins".

Usage
-----
    catalog = BuildSiteCatalog.compute(sim)
    site = catalog.nearest(mine_view.position, UnitType.BASE, sim)
    if site is not None:
        sim.build(worker, site, UnitType.BASE)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, AbstractSet, Iterable, List, Optional, Tuple

import numpy as np

from PlanningBot.logger import get_logger
from PlanningBot.world.unit_types import GridPosition, UnitType

if TYPE_CHECKING:
    from PlanningBot.world.simulation import Simulation

log = get_logger()

# Footprint used when the catalog is computed
CATALOG_FOOTPRINT_TYPE: UnitType = UnitType.BASE


class BuildSiteCatalog:
    """
    Ordered list of grid positions that could hold a 3x3 structure.

    One instance lives on RoundState and is rebuilt every round.
    """

    def __init__(self, sites: Iterable[Tuple[int, int]] = ()) -> None:
        coords = [tuple(s) for s in sites]
        self._sites = np.asarray(coords, dtype=np.int64).reshape(-1, 2)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def compute(cls, sim: "Simulation") -> "BuildSiteCatalog":
        """
        Scan every tile inside the map bounds and keep the buildable ones.

        Called once per round from PlanningBot.initialize_round().
        """
        width, height = sim.map_bounds
        sites: List[Tuple[int, int]] = []
        for x in range(width):
            for y in range(height):
                if sim.is_bounded_area_buildable(CATALOG_FOOTPRINT_TYPE, GridPosition(x, y)):
                    sites.append((x, y))

        catalog = cls(sites)
        log.debug(
            "BuildSiteCatalog: %d candidate sites on %dx%d map",
            len(catalog), width, height,
        )
        return catalog

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return int(self._sites.shape[0])

    def __iter__(self):
        for x, y in self._sites.tolist():
            yield GridPosition(x, y)

    def __contains__(self, position: object) -> bool:
        if not isinstance(position, tuple) or len(position) != 2:
            return False
        return bool(np.any(np.all(self._sites == np.asarray(position), axis=1)))

    @property
    def sites(self) -> List[GridPosition]:
        return list(self)

    def nearest(
        self,
        anchor: Tuple[int, int],
        unit_type: UnitType,
        sim: "Simulation",
        exclude: Optional[AbstractSet[GridPosition]] = None,
    ) -> Optional[GridPosition]:
        """
        Closest currently-buildable site to ``anchor`` for ``unit_type``.

        Distance is squared Euclidean. Ties go to the site that appears
        first in the catalog. Sites in ``exclude`` are skipped. Returns None
        when no site is buildable right now.
        """
        if len(self) == 0:
            return None

        buildable = np.fromiter(
            (
                (exclude is None or GridPosition(x, y) not in exclude)
                and sim.is_bounded_area_buildable(unit_type, GridPosition(x, y))
                for x, y in self._sites.tolist()
            ),
            dtype=bool,
            count=len(self),
        )
        if not buildable.any():
            log.debug("BuildSiteCatalog: no buildable %s site left", unit_type.value)
            return None

        deltas = self._sites - np.asarray(anchor, dtype=np.int64)
        sq_dist = np.einsum("ij,ij->i", deltas, deltas).astype(np.float64)
        sq_dist[~buildable] = np.inf
        best = int(np.argmin(sq_dist))
        x, y = self._sites[best].tolist()
        return GridPosition(x, y)
