import hashlib
from typing import Union

POINT_SPACE = 2**32
POINTS_PER_WEIGHT = 100
BUCKET_COUNT = 1024


def point_for(value: Union[str, bytes]) -> int:
    """Return the 32-bit ring point for ``value``.

    The point is the first four bytes of the SHA-1 digest read as a
    little-endian unsigned integer. Changing the byte order remaps every key.
    """
    if isinstance(value, str):
        value = value.encode("utf-8")
    return int.from_bytes(hashlib.sha1(value).digest()[:4], "little")


def virtual_point(target, index: int) -> int:
    return point_for(f"{target}-{index}")


def is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0
