"""
Marker Clusterer Module.

Groups finder hits into position markers and picks the L-shaped
triple (top-left, top-right, bottom-left) that best fits a QR code.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
import math
from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, List, Optional, Tuple

from qrcore.interfaces.finder_scanner_interface import FinderHit
from qrcore.interfaces.marker_clusterer_interface import IMarkerClusterer, MarkerTriple


@dataclass
class _HitGroup:
    """Running mean of the hits belonging to one marker."""
    sumX: float
    sumY: float
    sumModule: float
    sumConfidence: float
    votes: int
    row: int

    @classmethod
    def fromHit(cls, hit: FinderHit) -> "_HitGroup":
        return cls(hit.x, hit.y, hit.moduleSize, hit.confidence, 1, hit.row)

    def add(self, hit: FinderHit) -> None:
        self.sumX += hit.x
        self.sumY += hit.y
        self.sumModule += hit.moduleSize
        self.sumConfidence += hit.confidence
        self.votes += 1

    @property
    def center(self) -> Tuple[float, float]:
        return (self.sumX / self.votes, self.sumY / self.votes)

    @property
    def moduleSize(self) -> float:
        return self.sumModule / self.votes

    def toHit(self) -> FinderHit:
        return FinderHit(
            center=self.center,
            moduleSize=self.moduleSize,
            confidence=self.sumConfidence / self.votes,
            row=self.row
        )


class MarkerClusterer(IMarkerClusterer):
    """
    Picks the best L-shaped marker triple from scanner hits.

    1. Hits closer than mergeRadius module sizes to a group join it.
    2. Every triple of groups is tested for a right angle with legs of
       comparable length and consistent module sizes.
    3. The lowest combined deviation wins; ties keep scan order.
    """

    # Legs shorter than this many module sizes would overlap the markers
    MIN_LEG_MODULES = 7.0

    # |sin| below this is treated as collinear
    MIN_SINE = 0.1

    def __init__(
        self,
        mergeRadius: float = 2.0,
        angleTolerance: float = 0.25,
        legTolerance: float = 0.3,
        scaleTolerance: float = 0.5,
        maxCandidates: int = 30,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize MarkerClusterer.

        Args:
            mergeRadius: Merge distance in module sizes.
            angleTolerance: Maximum |cos| of the angle at the top-left marker.
            legTolerance: Maximum |a - b| / max(a, b) of the two legs.
            scaleTolerance: Maximum max/min - 1 of the three module sizes.
            maxCandidates: Number of most-voted groups considered for triples.
            logger: Logger instance for debug output.
        """
        self._mergeRadius = mergeRadius
        self._angleTolerance = angleTolerance
        self._legTolerance = legTolerance
        self._scaleTolerance = scaleTolerance
        self._maxCandidates = maxCandidates
        self._logger = logger or logging.getLogger(__name__)

    def cluster(self, hits: Iterable[FinderHit]) -> Optional[MarkerTriple]:
        """
        Group finder hits into the best-scoring marker triple.

        Args:
            hits: Finder hits in scan order

        Returns:
            MarkerTriple if a valid L-shape exists, None otherwise
        """
        markers = self.mergeHits(hits)
        if len(markers) < 3:
            self._logger.debug(f"Only {len(markers)} markers, need 3")
            return None

        best: Optional[MarkerTriple] = None
        for triple in combinations(markers, 3):
            candidate = self._scoreTriple(triple)
            # Strict comparison keeps the earliest triple on ties
            if candidate is not None and (best is None or candidate.score < best.score):
                best = candidate

        if best is None:
            self._logger.debug(f"No L-shaped triple among {len(markers)} markers")
        else:
            self._logger.debug(
                f"Marker triple: TL={self._fmt(best.topLeft)}, "
                f"TR={self._fmt(best.topRight)}, BL={self._fmt(best.bottomLeft)}, "
                f"score={best.score:.4f}"
            )
        return best

    def mergeHits(self, hits: Iterable[FinderHit]) -> List[FinderHit]:
        """
        Merge hits of the same marker.

        Args:
            hits: Finder hits in scan order.

        Returns:
            One averaged FinderHit per marker, in scan order, limited to
            the maxCandidates most-voted markers.
        """
        groups: List[_HitGroup] = []
        for hit in hits:
            for group in groups:
                gx, gy = group.center
                radius = self._mergeRadius * max(group.moduleSize, hit.moduleSize)
                if math.hypot(hit.x - gx, hit.y - gy) <= radius:
                    group.add(hit)
                    break
            else:
                groups.append(_HitGroup.fromHit(hit))

        if len(groups) > self._maxCandidates:
            ranked = sorted(range(len(groups)), key=lambda i: -groups[i].votes)
            keep = sorted(ranked[:self._maxCandidates])
            groups = [groups[i] for i in keep]

        return [group.toHit() for group in groups]

    def _scoreTriple(
        self,
        triple: Tuple[FinderHit, FinderHit, FinderHit]
    ) -> Optional[MarkerTriple]:
        """
        Test one triple for the L-shape and assign roles.

        Args:
            triple: Three merged markers.

        Returns:
            MarkerTriple with roles and score, or None if rejected.
        """
        modules = [m.moduleSize for m in triple]
        scaleDeviation = max(modules) / min(modules) - 1.0
        if scaleDeviation > self._scaleTolerance:
            return None

        # The vertex closest to a right angle is the top-left marker
        bestVertex = None
        for i in range(3):
            vertex = triple[i]
            p, q = (triple[j] for j in range(3) if j != i)
            ax, ay = p.x - vertex.x, p.y - vertex.y
            bx, by = q.x - vertex.x, q.y - vertex.y
            legA, legB = math.hypot(ax, ay), math.hypot(bx, by)
            if legA == 0.0 or legB == 0.0:
                return None
            cosine = abs(ax * bx + ay * by) / (legA * legB)
            if bestVertex is None or cosine < bestVertex[0]:
                cross = ax * by - ay * bx
                bestVertex = (cosine, vertex, p, q, legA, legB, cross)

        cosine, topLeft, p, q, legA, legB, cross = bestVertex
        if cosine > self._angleTolerance:
            return None
        if abs(cross) / (legA * legB) < self.MIN_SINE:
            return None

        minLeg = self.MIN_LEG_MODULES * max(modules)
        if legA < minLeg or legB < minLeg:
            return None

        legDeviation = abs(legA - legB) / max(legA, legB)
        if legDeviation > self._legTolerance:
            return None

        # Clockwise on screen: cross(TR - TL, BL - TL) > 0 with y pointing down
        topRight, bottomLeft = (p, q) if cross > 0 else (q, p)

        return MarkerTriple(
            topLeft=topLeft,
            topRight=topRight,
            bottomLeft=bottomLeft,
            score=cosine + legDeviation + scaleDeviation
        )

    @staticmethod
    def _fmt(hit: FinderHit) -> str:
        return f"({hit.x:.1f}, {hit.y:.1f})"
