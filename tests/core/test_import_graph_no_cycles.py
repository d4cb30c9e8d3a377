from core.dev.import_graph import (
    build_import_graph,
    detect_cycles,
    forbidden_edges,
)

# Layering:
#   core.config/errors/metrics/eventbus/events -> foundation
#   core.registry/modules/settings -> adapters (no orchestration)
#   core.updates -> checking core; core.notify renders its results
# Nothing in core may reach into the HTTP layer.


def test_import_graph_no_cycles_and_forbidden_edges():
    graph = build_import_graph("core")
    cycles = detect_cycles(graph)
    assert not cycles, f"Import cycles detected: {cycles}"
    rules = [
        ("core.metrics", "core.events"),
        ("core.eventbus", "core.events"),
        ("core.config", "core.updates"),
        ("core.config", "core.events"),
        ("core.modules", "core.updates"),
        ("core.settings", "core.updates"),
        ("core.registry.package", "core.updates"),
        # checker must not depend on notification rendering
        ("core.updates.checker", "core.notify"),
        ("core.updates.store", "core.notify"),
        ("core.notify", "core.updates.notifier"),
        ("core.notify", "core.updates.scheduler"),
        ("core", "outdated_notifier"),
    ]
    bad = forbidden_edges(graph, rules)
    assert not bad, f"Forbidden import edges: {bad}"


def test_relative_imports_are_resolved():
    graph = build_import_graph("core")
    assert "core.updates.chunking" in graph["core.updates.checker"]
    assert "core.notify.messages" in graph["core.notify.sinks"]
    assert "core.config.schemas.notifier" in graph["core.config.loader"]
