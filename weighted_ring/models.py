from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, StrictInt, TypeAdapter

# None and 0 both mean "remove the target".
Weight = Optional[Annotated[StrictInt, Field(ge=0)]]

weight_adapter: TypeAdapter = TypeAdapter(Weight)


class TargetShare(BaseModel):
    """Configured and realised share of the keyspace for one target.

    ``target`` is the ``str()`` of the ring target, so reports stay
    serialisable whatever identifiers the ring uses.
    """

    target: str
    weight: int
    weight_percentage: float
    buckets: int
    bucket_percentage: float


class RingReport(BaseModel):
    total_weight: int
    point_count: int
    bucket_count: int
    targets: List[TargetShare] = Field(default_factory=list)
