import pytest

from weighted_ring import ConsistentHashRing, RingReport


def test_report_matches_registry(abc_ring):
    report = abc_ring.report()
    assert isinstance(report, RingReport)
    assert report.total_weight == 4
    assert report.point_count == len(abc_ring.sorted_points)
    assert report.bucket_count == 1024

    counts = abc_ring.bucket_counts()
    assert [share.target for share in report.targets] == ["A", "B", "C"]
    for share in report.targets:
        assert share.weight == abc_ring.weight(share.target)
        assert share.weight_percentage == abc_ring.weight_percentage(share.target)
        assert share.buckets == counts[share.target]
        assert share.bucket_percentage == pytest.approx(100 * counts[share.target] / 1024)


def test_report_bucket_shares_sum_to_hundred(abc_ring):
    shares = abc_ring.report().targets
    assert sum(s.bucket_percentage for s in shares) == pytest.approx(100.0)
    assert sum(s.buckets for s in shares) == 1024


def test_empty_report(ring):
    report = ring.report()
    assert report.total_weight == 0
    assert report.point_count == 0
    assert report.targets == []


def test_report_serialises():
    ring = ConsistentHashRing({"cache-a": 1})
    data = ring.report().model_dump()
    assert data["targets"][0]["target"] == "cache-a"
    assert data["targets"][0]["buckets"] == 1024


def test_report_renders_targets_as_strings():
    ring = ConsistentHashRing({10: 1, 2: 1})
    report = ring.report()
    assert [share.target for share in report.targets] == ["2", "10"]
    assert sum(share.buckets for share in report.targets) == 1024
