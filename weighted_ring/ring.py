import logging
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from .config import Settings, settings
from .errors import (
    EmptyRingError,
    InvalidPointError,
    InvalidTargetError,
    InvalidWeightError,
    RingInvariantError,
)
from .hashing import (
    BUCKET_COUNT,
    POINT_SPACE,
    POINTS_PER_WEIGHT,
    is_power_of_two,
    point_for,
    virtual_point,
)
from .models import RingReport, TargetShare, weight_adapter

logger = logging.getLogger(__name__)


class ConsistentHashRing:
    """Weighted consistent hashing ring over a 32-bit circle.

    Each target with weight ``w`` owns ``w * points_per_weight`` virtual
    points. A point on the circle belongs to the target of the first virtual
    point at or after it, wrapping past the largest point back to the smallest.

    Every mutation rebuilds the ring and drops the cached total weight and
    bucket table. The ring is not thread safe; serialize writes externally.
    """

    def __init__(
        self,
        weights: Optional[Mapping[Hashable, Optional[int]]] = None,
        points_per_weight: int = POINTS_PER_WEIGHT,
        bucket_count: int = BUCKET_COUNT,
    ):
        if points_per_weight < 1:
            raise ValueError("points_per_weight must be positive")
        if bucket_count > POINT_SPACE or not is_power_of_two(bucket_count):
            raise ValueError("bucket_count must be a power of two no larger than 2**32")

        self.points_per_weight = points_per_weight
        self.bucket_count = bucket_count
        self.weights: Dict[Hashable, int] = {}
        self.points: Dict[int, Hashable] = {}  # virtual point -> target
        self.sorted_points: List[int] = []
        self._total_weight: Optional[int] = None
        self._buckets: Optional[List[Hashable]] = None

        if weights:
            self.set_weights(weights)

    def __len__(self) -> int:
        return len(self.weights)

    def __contains__(self, target) -> bool:
        return target in self.weights

    # Weight registry

    def set_weights(self, updates: Mapping[Hashable, Optional[int]]) -> None:
        """Apply a batch of weight changes, then rebuild once.

        ``0`` and ``None`` remove the target. Booleans are rejected rather
        than read as 0 or 1, so ``False`` raises ``InvalidWeightError``.
        Targets must sort together with the ones already in the ring.

        The batch is validated as a whole first, so a rejected entry leaves
        the ring unchanged.
        """
        weights = dict(self.weights)
        for target, weight in dict(updates).items():
            try:
                weight = weight_adapter.validate_python(weight)
            except ValidationError as exc:
                logger.warning("Rejected weight %r for target %r", weight, target)
                raise InvalidWeightError(target, weight, exc.errors()[0]["msg"]) from exc
            if weight:
                weights[target] = weight
            else:
                weights.pop(target, None)

        try:
            sorted(weights)
        except TypeError as exc:
            logger.warning("Rejected targets that cannot be ordered: %s", exc)
            raise InvalidTargetError(f"Targets cannot be ordered: {exc}") from exc

        self._total_weight = None
        self._buckets = None
        self.weights = weights
        self._rebuild()

    def set_weight(self, target: Hashable, weight: Optional[int]) -> None:
        self.set_weights({target: weight})

    def reset_all(self) -> None:
        self.set_weights({target: 0 for target in self.list_targets()})

    def list_targets(self) -> List[Hashable]:
        return sorted(self.weights)

    def weight(self, target: Hashable) -> int:
        return self.weights.get(target, 0)

    def total_weight(self) -> int:
        if self._total_weight is None:
            self._total_weight = sum(self.weights.values())
        return self._total_weight

    def weight_percentage(self, target: Hashable) -> float:
        """Configured share of ``target`` in [0, 100]."""
        if not self.weights.get(target):
            return 0
        return 100 * self.weights[target] / self.total_weight()

    # Ring builder

    def _rebuild(self) -> None:
        points: Dict[int, Hashable] = {}
        # Sorted order makes the winner of an exact point collision reproducible.
        for target in self.list_targets():
            for index in range(1, self.weights[target] * self.points_per_weight + 1):
                points[virtual_point(target, index)] = target

        self.points = points
        self.sorted_points = sorted(points)
        logger.debug(
            "Rebuilt ring with %d targets and %d points",
            len(self.weights),
            len(self.sorted_points),
        )

    # Lookup engine

    def _require_points(self) -> List[int]:
        if not self.sorted_points:
            if self.weights:
                raise RingInvariantError(
                    f"{len(self.weights)} targets are configured but the ring has no points"
                )
            raise EmptyRingError()
        return self.sorted_points

    def resolve_point(self, point: int) -> Hashable:
        """Return the target owning the first virtual point >= ``point``."""
        if isinstance(point, bool) or not isinstance(point, int):
            raise InvalidPointError(f"Point must be an integer, got {point!r}")
        if not 0 <= point < POINT_SPACE:
            raise InvalidPointError(f"Point {point} is outside [0, 2**32)")

        order = self._require_points()
        lo, hi = 0, len(order) - 1  # inclusive candidates

        while True:
            mid = (lo + hi) // 2
            val_at_mid = order[mid]
            val_below = order[mid - 1] if mid else 0

            if val_below < point <= val_at_mid:
                return self.points[val_at_mid]

            # wrap-around
            if lo == hi:
                return self.points[order[0]]

            if val_at_mid < point:
                lo = min(mid + 1, hi)
            else:
                hi = max(mid - 1, lo)

    def resolve_key(self, key: Union[str, bytes]) -> Hashable:
        return self.resolve_point(point_for(key))

    def bucket_table(self) -> List[Hashable]:
        """Targets of the sample points ``n * 2**32 / bucket_count``, in order."""
        if self._buckets is None:
            step = POINT_SPACE // self.bucket_count
            self._buckets = [self.resolve_point(n * step) for n in range(self.bucket_count)]
            logger.debug("Built bucket table with %d buckets", self.bucket_count)
        return list(self._buckets)

    def resolve_bucket(self, n: int) -> Hashable:
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidPointError(f"Bucket index must be an integer, got {n!r}")
        if self._buckets is None:
            self.bucket_table()
        return self._buckets[n % self.bucket_count]

    def bucket_counts(self) -> Dict[Hashable, int]:
        counts: Dict[Hashable, int] = {}
        for target in self.bucket_table():
            counts[target] = counts.get(target, 0) + 1
        return counts

    def distribution(self, keys: Iterable[Union[str, bytes]]) -> Dict[Hashable, int]:
        counts: Dict[Hashable, int] = {}
        for key in keys:
            target = self.resolve_key(key)
            counts[target] = counts.get(target, 0) + 1
        return counts

    def report(self) -> RingReport:
        """Summarise configured weight against bucket share per target.

        Targets appear in sorted order and are rendered with ``str()``.
        """
        if not self.weights:
            return RingReport(total_weight=0, point_count=0, bucket_count=self.bucket_count)

        counts = self.bucket_counts()
        shares = [
            TargetShare(
                target=str(target),
                weight=self.weights[target],
                weight_percentage=self.weight_percentage(target),
                buckets=counts.get(target, 0),
                bucket_percentage=100 * counts.get(target, 0) / self.bucket_count,
            )
            for target in self.list_targets()
        ]
        return RingReport(
            total_weight=self.total_weight(),
            point_count=len(self.sorted_points),
            bucket_count=self.bucket_count,
            targets=shares,
        )


def create_ring(
    weights: Optional[Mapping[Hashable, Optional[int]]] = None,
    config: Optional[Settings] = None,
) -> ConsistentHashRing:
    config = config or settings
    return ConsistentHashRing(
        weights,
        points_per_weight=config.points_per_weight,
        bucket_count=config.bucket_count,
    )
