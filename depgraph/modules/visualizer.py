# depgraph/modules/visualizer.py
"""
Exporta o grafo no formato DOT (graphviz):

    digraph dependencies {
      "pkgA 1.0.1" -> "pkgB 2.3.0";
    }

Uma linha por aresta; aspas e barras invertidas nos rótulos são escapadas.
Com sort_edges (padrão) as linhas saem em ordem lexicográfica de
(pacote, dependência), para diffs reprodutíveis.
"""

from __future__ import annotations
import os

from depgraph.modules.graph import DependencyGraph

HEADER = "digraph dependencies {"
FOOTER = "}"


class Visualizer:

    def __init__(self, sort_edges: bool = True):
        self.sort_edges = sort_edges

    @staticmethod
    def quote(package) -> str:
        label = package.label.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{label}"'

    @classmethod
    def edge_line(cls, package, dependency) -> str:
        return f"  {cls.quote(package)} -> {cls.quote(dependency)};"

    def render(self, graph: DependencyGraph) -> str:
        edges = list(graph.edges())
        if self.sort_edges:
            edges.sort(key=lambda e: (e[0].sort_key(), e[1].sort_key()))
        lines = [HEADER]
        lines.extend(self.edge_line(p, d) for p, d in edges)
        lines.append(FOOTER)
        return "\n".join(lines) + "\n"

    def write(self, graph: DependencyGraph, path: str) -> str:
        dirpath = os.path.dirname(os.path.abspath(path))
        os.makedirs(dirpath, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(self.render(graph))
        return path
