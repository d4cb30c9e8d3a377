"""Import dependency graph for internal modules.

Parses .py files under a root package (default core/) with `ast` and
collects edges between project-internal modules. Relative imports are
resolved against the importing module. Used in tests to enforce:
  - No cycles between modules.
  - No forbidden edges (layering constraints).
"""
from __future__ import annotations

import ast
from pathlib import Path
from typing import Dict, List, Set, Tuple


def _module_name(root_path: Path, py: Path) -> str:
    rel = py.relative_to(root_path).with_suffix("").as_posix().replace("/", ".")
    return f"{root_path.name}.{rel}"


def _resolve_relative(module: str, node: ast.ImportFrom) -> str:
    # module names keep their last segment ("pkg.__init__", "pkg.mod")
    base = module.split(".")[:-1]
    if node.level > 1:
        base = base[: len(base) - (node.level - 1)]
    if node.module:
        base = base + node.module.split(".")
    return ".".join(base)


def build_import_graph(root: str | Path = "core") -> Dict[str, Set[str]]:
    root_path = Path(root)
    prefix = root_path.name + "."
    edges: Dict[str, Set[str]] = {}
    for py in root_path.rglob("*.py"):
        if "__pycache__" in py.parts:
            continue
        mod = _module_name(root_path, py)
        try:
            tree = ast.parse(py.read_text(encoding="utf-8"))
        except SyntaxError:
            continue
        edges.setdefault(mod, set())
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                targets = [n.name for n in node.names]
            elif isinstance(node, ast.ImportFrom):
                if node.level:
                    targets = [_resolve_relative(mod, node)]
                else:
                    targets = [node.module or ""]
            else:
                continue
            for tgt in targets:
                if tgt.startswith(prefix):
                    edges[mod].add(tgt)
    for n in list(edges.keys()):
        for m in edges[n]:
            edges.setdefault(m, set())
    return edges


def detect_cycles(graph: Dict[str, Set[str]]) -> List[List[str]]:
    visited: Set[str] = set()
    stack: Set[str] = set()
    cycles: List[List[str]] = []

    def dfs(node: str, path: List[str]):
        if node in stack:
            if node in path:
                idx = path.index(node)
                cycles.append(path[idx:] + [node])
            return
        if node in visited:
            return
        visited.add(node)
        stack.add(node)
        for nxt in sorted(graph.get(node, ())):
            dfs(nxt, path + [nxt])
        stack.remove(node)

    for n in sorted(graph):
        if n not in visited:
            dfs(n, [n])
    return cycles


def forbidden_edges(
    graph: Dict[str, Set[str]], rules: List[Tuple[str, str]]
) -> List[Tuple[str, str]]:
    found: List[Tuple[str, str]] = []
    for src, targets in graph.items():
        for dst in targets:
            for a, b in rules:
                if src.startswith(a) and dst.startswith(b):
                    found.append((src, dst))
    return found


__all__ = [
    "build_import_graph",
    "detect_cycles",
    "forbidden_edges",
]
