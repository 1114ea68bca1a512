"""NodeProximityIndex - Radius search over geographic points.

Finds every pair of points whose great-circle separation is within a
threshold. Small inputs use a plain pairwise scan; larger inputs use
SciPy's KD-tree over points projected onto the sphere (chord distance is
monotonic in great-circle distance), so the O(n²) scan is avoided for
ski areas with thousands of nodes.

Both strategies confirm candidates with the exact haversine distance and
return identical, sorted results.
"""

import logging
from typing import Optional, Sequence

import numpy as np
from scipy.spatial import cKDTree

from skiresort_navigator.constants import GraphConfig
from skiresort_navigator.core.geo_calculator import GeoCalculator

logger = logging.getLogger(__name__)


class NodeProximityIndex:
    """Pairwise proximity search over (lat, lon) points.

    Attributes:
        positions: (lat, lon) tuples; pair results refer to indices into this list

    Example:
        index = NodeProximityIndex(positions=[(46.9, 10.9), (46.9001, 10.9)])
        index.pairs_within(threshold_m=50.0)  # [(0, 1, 11.1...)]
    """

    def __init__(
        self,
        positions: Sequence[tuple[float, float]],
        use_kdtree: Optional[bool] = None,
    ) -> None:
        """Create the index.

        Args:
            positions: (lat, lon) pairs in decimal degrees
            use_kdtree: Force (True) or disable (False) the KD-tree.
                None picks based on GraphConfig.SPATIAL_INDEX_MIN_NODES.
        """
        self.positions = list(positions)
        if use_kdtree is None:
            use_kdtree = len(self.positions) >= GraphConfig.SPATIAL_INDEX_MIN_NODES
        self.use_kdtree = use_kdtree

    def __len__(self) -> int:
        return len(self.positions)

    def pairs_within(self, threshold_m: float) -> list[tuple[int, int, float]]:
        """All index pairs (i, j), i < j, separated by at most threshold_m.

        Args:
            threshold_m: Inclusive maximum great-circle distance in meters,
                compared with GraphConfig.DISTANCE_TOLERANCE_M of slack

        Returns:
            List of (i, j, distance_m) sorted by (i, j).
        """
        if len(self.positions) < 2:
            return []

        candidates = self._kdtree_candidates(threshold_m) if self.use_kdtree else self._all_pairs()

        pairs = []
        for i, j in candidates:
            lat1, lon1 = self.positions[i]
            lat2, lon2 = self.positions[j]
            dist = GeoCalculator.haversine_distance_m(lat1=lat1, lon1=lon1, lat2=lat2, lon2=lon2)
            if dist <= threshold_m + GraphConfig.DISTANCE_TOLERANCE_M:
                pairs.append((i, j, dist))

        pairs.sort(key=lambda pair: (pair[0], pair[1]))
        return pairs

    def _all_pairs(self) -> list[tuple[int, int]]:
        n = len(self.positions)
        return [(i, j) for i in range(n) for j in range(i + 1, n)]

    def _kdtree_candidates(self, threshold_m: float) -> list[tuple[int, int]]:
        """Candidate pairs from a KD-tree on sphere-projected coordinates.

        The search radius is slightly enlarged so that float rounding in the
        projection never drops a pair that the haversine check would accept.
        """
        points = np.array(
            [GeoCalculator.to_cartesian(lat=lat, lon=lon) for lat, lon in self.positions],
            dtype=np.float64,
        )
        radius = GeoCalculator.arc_to_chord_m(threshold_m) * (1 + GraphConfig.SPATIAL_INDEX_RADIUS_SLACK) + 1e-3
        tree = cKDTree(points)
        candidates = sorted(tree.query_pairs(r=radius))
        logger.debug(f"KD-tree search over {len(self.positions)} points yielded {len(candidates)} candidate pairs")
        return candidates
