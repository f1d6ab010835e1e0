# depgraph/modules/loader.py
"""
Carrega grafos a partir de uma descrição JSON.

Formato esperado:
{
  "packages": [
    {
      "name": "pkgA",
      "version": "1.0.1",
      "depends": [
        {"name": "pkgB", "version": "2.3.0"},
        "pkgD@1.5.0"
      ]
    },
    ...
  ]
}

Dependências podem ser dicts {"name", "version"} ou strings "name@version".
Todos os pacotes listados em "packages" são registrados antes de qualquer
aresta, para não zerar contagens de in-degree já acumuladas.
"""

from __future__ import annotations
import json
from typing import Any, Dict, List, Tuple

from depgraph.modules.graph import DependencyGraph
from depgraph.modules.logger import get_logger
from depgraph.modules.package import Package

log = get_logger("loader")


class GraphFormatError(ValueError):
    pass


def _package_from(item: Any, where: str) -> Package:
    if isinstance(item, str):
        try:
            return Package.parse(item)
        except ValueError as e:
            raise GraphFormatError(f"{where}: {e}") from None
    if isinstance(item, dict):
        name, version = item.get("name"), item.get("version")
        if not isinstance(name, str) or not isinstance(version, str) or not name or not version:
            raise GraphFormatError(f"{where}: 'name' and 'version' must be non-empty strings")
        return Package(name, version)
    raise GraphFormatError(f"{where}: expected object or 'name@version' string, got {type(item).__name__}")


def graph_from_dict(data: Dict[str, Any]) -> DependencyGraph:
    if not isinstance(data, dict) or not isinstance(data.get("packages"), list):
        raise GraphFormatError("document must be an object with a 'packages' list")

    entries: List[Tuple[Package, List[Package]]] = []
    for i, entry in enumerate(data["packages"]):
        where = f"packages[{i}]"
        pkg = _package_from(entry, where)
        raw_deps = entry.get("depends", []) if isinstance(entry, dict) else []
        if raw_deps is None:
            raw_deps = []
        if not isinstance(raw_deps, list):
            raise GraphFormatError(f"{where}.depends must be a list")
        deps = [_package_from(d, f"{where}.depends[{j}]") for j, d in enumerate(raw_deps)]
        entries.append((pkg, deps))

    graph = DependencyGraph()
    for pkg, _ in entries:
        graph.register_package(pkg)
    for pkg, deps in entries:
        for dep in deps:
            graph.add_dependency(pkg, dep)
    log.debug(f"loaded {len(graph)} packages, {graph.edge_count()} edges")
    return graph


def load_graph(path: str) -> DependencyGraph:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"{path}: invalid JSON: {e}") from None
    return graph_from_dict(data)


SAMPLE = {
    "packages": [
        {"name": "pkgA", "version": "1.0.1", "depends": ["pkgB@2.3.0", "pkgD@1.5.0"]},
        {"name": "pkgB", "version": "2.3.0", "depends": ["pkgC@3.1.2"]},
        {"name": "pkgC", "version": "3.1.2"},
        {"name": "pkgD", "version": "1.5.0"},
    ]
}


def sample_graph() -> DependencyGraph:
    """Conjunto de exemplo: pkgA -> pkgB -> pkgC, pkgA -> pkgD"""
    return graph_from_dict(SAMPLE)
