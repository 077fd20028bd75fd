"""Erosion / hop / deposit transport rule for one cycle.

Sand moves along the first grid axis only. Every lit, non-empty cell loses
one slab, which then hops ``hop_length`` cells downwind until it lands in a
shadow or passes a deposition draw. All height changes go through
``deposit`` so that steep local slopes topple onto a neighbor.

Cells are visited sequentially in a shuffled order; neighboring cells read
and write each other's heights within the same cycle, so the sweep is not
safe to run concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from random import Random

from dunescape.config.constants import AVALANCHE_THRESHOLD
from dunescape.config.types import TransportParams
from dunescape.domain.grid import Grid


class Direction(Enum):
    """Avalanche neighbor offsets (di, dj), scanned in declaration order."""

    UPWIND = ((-1, 0), (0, 1), (0, -1), (-1, -1), (-1, 1))
    DOWNWIND = ((1, 0), (0, 1), (0, -1), (1, -1), (1, 1))

    @property
    def offsets(self) -> tuple[tuple[int, int], ...]:
        return self.value


@dataclass(frozen=True)
class CycleStats:
    """Counters collected while running one transport cycle."""

    active_cells: int = 0
    """Lit, non-empty cells that eroded a slab."""
    hops: int = 0
    """Total hops taken by all eroded slabs."""
    capped_hops: int = 0
    """Slabs force-deposited after reaching ``max_hops``."""
    avalanches: int = 0
    """Erosion/deposition changes redirected to a neighbor."""
    shadowed_cells: int = 0
    """Cells in shadow at the start of the cycle."""


def deposit(
    heights: Grid,
    i: int,
    j: int,
    amount: int,
    direction: Direction,
    threshold: int = AVALANCHE_THRESHOLD,
) -> tuple[int, int]:
    """Add ``amount`` slabs at (i, j), or at the first neighbor it would over-steepen.

    A neighbor ``n`` takes the change instead when
    ``amount * (h(i, j) - h(n)) > threshold``. Returns the cell that changed.
    """
    width, height = heights.width, heights.height
    values = heights.values
    h_ij = values[i * height + j]
    target = (i, j)
    for di, dj in direction.value:
        ni = (i + di) % width
        nj = (j + dj) % height
        if amount * (h_ij - values[ni * height + nj]) > threshold:
            target = (ni, nj)
            break
    idx = target[0] * height + target[1]
    values[idx] += amount
    return target


def transport_cell(
    heights: Grid,
    shadow: Grid,
    i: int,
    j: int,
    params: TransportParams,
    rng: Random,
) -> tuple[int, bool, int] | None:
    """Erode one slab at (i, j) and hop it downwind until it deposits.

    Returns ``(hops, capped, avalanches)`` or ``None`` when the cell is empty
    or shadowed and nothing moved.
    """
    height = heights.height
    if heights.values[i * height + j] <= 0 or shadow.values[i * height + j] != 0:
        return None

    avalanches = 0
    if deposit(heights, i, j, -1, Direction.UPWIND) != (i, j):
        avalanches += 1

    width = heights.width
    hop_length = params.hop_length
    prob_bare = params.prob_deposit_bare
    prob_sand = params.prob_deposit_sand
    max_hops = params.max_hops
    values = heights.values
    mask = shadow.values

    ic = i
    hops = 0
    capped = False
    while True:
        ic = (ic + hop_length) % width
        hops += 1
        idx = ic * height + j
        if mask[idx] == 1:
            break
        rd = rng.random()
        # a single draw serves both clauses
        if (values[idx] == 0 and rd < prob_bare) or rd < prob_sand:
            break
        if max_hops is not None and hops >= max_hops:
            capped = True
            break

    if deposit(heights, ic, j, 1, Direction.DOWNWIND) != (ic, j):
        avalanches += 1
    return hops, capped, avalanches


def run_transport(
    heights: Grid,
    shadow: Grid,
    params: TransportParams,
    rng: Random,
    shadowed_cells: int = 0,
) -> CycleStats:
    """Apply ``transport_cell`` once to every cell in a freshly shuffled order."""
    height = heights.height
    order = list(range(heights.width * height))
    rng.shuffle(order)

    active = 0
    hops = 0
    capped = 0
    avalanches = 0
    for flat in order:
        i, j = divmod(flat, height)
        outcome = transport_cell(heights, shadow, i, j, params, rng)
        if outcome is None:
            continue
        cell_hops, cell_capped, cell_avalanches = outcome
        active += 1
        hops += cell_hops
        capped += cell_capped
        avalanches += cell_avalanches

    return CycleStats(
        active_cells=active,
        hops=hops,
        capped_hops=capped,
        avalanches=avalanches,
        shadowed_cells=shadowed_cells,
    )
