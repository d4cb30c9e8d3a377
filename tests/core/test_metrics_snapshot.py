from core import metrics


def test_metrics_snapshot_counters_and_histograms():
    metrics.reset_for_tests()
    metrics.inc_update_check("ok")
    metrics.inc_update_check("ok")
    metrics.inc_update_check_error("")
    metrics.inc_updates_found(0)
    metrics.inc_updates_found(3)
    metrics.inc("registry_requests_total", {"status": 200})
    for v in (30, 10, 20):
        metrics.observe("update_check_latency_ms", v)

    snap = metrics.snapshot()
    counters = snap["counters"]
    assert counters == {
        "update_checks_total{status=ok}": 2,
        "updates_found_total": 3,
        "registry_requests_total{status=200}": 1,
    }
    hist = snap["histograms"]["update_check_latency_ms"]
    assert hist == {"count": 3, "min": 10, "max": 30, "p50": 20, "last": 20}
