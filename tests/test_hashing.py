from weighted_ring.hashing import POINT_SPACE, is_power_of_two, point_for, virtual_point


def test_point_is_little_endian_sha1_prefix():
    # sha1("") = da39a3ee..., sha1("abc") = a9993e36...
    assert point_for("") == 0xEEA339DA
    assert point_for("abc") == 0x363E99A9


def test_str_and_bytes_hash_alike():
    assert point_for("server-1") == point_for(b"server-1")


def test_virtual_point_uses_dash_separator():
    assert virtual_point("cache-a", 7) == point_for("cache-a-7")


def test_points_stay_in_keyspace():
    for i in range(500):
        assert 0 <= point_for(f"key-{i}") < POINT_SPACE


def test_is_power_of_two():
    assert is_power_of_two(1)
    assert is_power_of_two(1024)
    assert not is_power_of_two(0)
    assert not is_power_of_two(1000)
