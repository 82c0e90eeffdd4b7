"""
Board Commitment - Ship Segment Canonicalizer

Recovers a deterministic, ship-respecting claim order from hit flags alone.

Algorithm:
1. Scan rows 1..R, and within a row columns A.. (row-major).
2. At an unused hit: emit it, then walk right (+1, +2, ... columns)
   emitting unused hits, then walk down from the ORIGINAL cell
   (+1, +2, ... rows) emitting unused hits. Each walk stops at the
   board edge, a miss, or a used cell.
3. Used cells are skipped when the scan reaches them later.
4. The bundle must hold exactly K entries.

Ships are assumed straight and not touching; the scan reaches a ship's
top-left cell before any other cell of it because both walks only look
right or down. A cluster that breaks this assumption is fatal, since no
straight-run ordering of exactly K claims exists for it:
- an origin that extends both right and down (an L bending at its origin)
- any other hit touching a finished segment (an L bending elsewhere, or
  two touching ships)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.board.proof_index import ProofIndex
from core.schemas.board import coordinate_key
from core.schemas.commitment import ClaimBundle
from core.schemas.errors import SegmentCountException, SegmentShapeException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """
    A straight run of hit cells discovered from one scan origin.

    cells holds (1-based row, 0-based column) pairs in emission order;
    cells[0] is the origin.
    """
    cells: tuple[tuple[int, int], ...]

    @property
    def origin(self) -> tuple[int, int]:
        return self.cells[0]

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def orientation(self) -> str:
        if len(self.cells) == 1:
            return "single"
        if self.cells[1][0] == self.origin[0]:
            return "horizontal"
        return "vertical"


class ShipSegmentCanonicalizer:
    """Orders the hit coordinates of a ProofIndex for sequential claims."""

    def __init__(self, index: ProofIndex) -> None:
        self.index = index
        self.geometry = index.geometry

    def segments(self) -> list[Segment]:
        """
        Discover segments in scan order.

        Raises:
            SegmentShapeException: If a hit cluster is not a straight, separate run
        """
        g = self.geometry
        used = [False] * g.cell_count
        found: list[Segment] = []

        for row in range(1, g.rows + 1):
            for col in range(g.columns):
                if not self._free_hit(row, col, used):
                    continue
                used[g.offset(row, col)] = True
                right = self._walk(row, col, 0, 1, used)
                down = self._walk(row, col, 1, 0, used)
                if right and down:
                    r, c = down[0]
                    raise SegmentShapeException(
                        self._key(row, col),
                        self._key(r, c),
                        "segment extends both rightward and downward",
                    )
                segment = Segment(((row, col), *right, *down))
                self._require_isolated(segment)
                logger.debug(
                    f"Segment at {self._key(row, col)}: "
                    f"{len(segment)} cell(s), {segment.orientation}"
                )
                found.append(segment)

        return found

    def _key(self, row: int, col: int) -> str:
        return coordinate_key(row, self.geometry.label_for(col))

    def _free_hit(self, row: int, col: int, used: list[bool]) -> bool:
        g = self.geometry
        if not g.contains(row, col):
            return False
        if used[g.offset(row, col)]:
            return False
        return self.index.entry_at(row, col).hit

    def _walk(
        self,
        row: int,
        col: int,
        d_row: int,
        d_col: int,
        used: list[bool],
    ) -> list[tuple[int, int]]:
        g = self.geometry
        run: list[tuple[int, int]] = []
        step = 1
        while True:
            r, c = row + d_row * step, col + d_col * step
            if not self._free_hit(r, c, used):
                break
            used[g.offset(r, c)] = True
            run.append((r, c))
            step += 1
        return run

    def _require_isolated(self, segment: Segment) -> None:
        """Fail if any hit outside the segment touches one of its cells."""
        members = set(segment.cells)
        for row, col in segment.cells:
            for r, c in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
                if (r, c) in members or not self.geometry.contains(r, c):
                    continue
                if self.index.entry_at(r, c).hit:
                    raise SegmentShapeException(
                        self._key(*segment.origin),
                        self._key(r, c),
                        "hit touches the segment without extending it in a straight line",
                    )

    def canonicalize(self) -> ClaimBundle:
        """
        Build the claim bundle.

        Raises:
            SegmentShapeException: If a hit cluster is not a straight, separate run
            SegmentCountException: If the bundle does not hold exactly K entries
        """
        g = self.geometry
        sorted_proofs: list[list[str]] = []
        coordinate_numbers: list[int] = []
        coordinate_literals: list[str] = []

        segments = self.segments()
        for segment in segments:
            for row, col in segment.cells:
                label = g.label_for(col)
                sorted_proofs.append(list(self.index.lookup(row, label).proof))
                coordinate_numbers.append(row)
                coordinate_literals.append(label)

        expected = g.ship_cells
        if not (
            len(sorted_proofs) == expected
            and len(coordinate_numbers) == expected
            and len(coordinate_literals) == expected
        ):
            raise SegmentCountException(
                expected,
                len(sorted_proofs),
                len(coordinate_numbers),
                len(coordinate_literals),
            )

        logger.info(f"Ordered {expected} claims across {len(segments)} segments")
        return ClaimBundle(
            sorted_proofs=sorted_proofs,
            coordinate_numbers=coordinate_numbers,
            coordinate_literals=coordinate_literals,
        )


def canonicalize_claims(index: ProofIndex) -> ClaimBundle:
    """Convenience wrapper: order the hits of an index into a ClaimBundle."""
    return ShipSegmentCanonicalizer(index).canonicalize()
