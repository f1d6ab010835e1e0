# depgraph/modules/impact.py

from __future__ import annotations
from collections import deque
from typing import List, Set

from depgraph.modules.graph import DependencyGraph
from depgraph.modules.logger import get_logger
from depgraph.modules.package import Package

log = get_logger("impact")


class ImpactAnalyzer:
    """
    Localiza pacotes que dependem do pacote informado.
    Usado antes de remover ou atualizar um pacote.
    """

    def dependents(self, graph: DependencyGraph, target: Package) -> List[Package]:
        """
        Dependentes diretos (um salto) de `target`, ordenados por (name, version).
        Pacote desconhecido -> lista vazia.
        """
        found = [pkg for pkg, deps in graph.graph.items() if target in deps]
        found.sort(key=Package.sort_key)
        log.debug(f"Reverse deps for {target}: {[p.label for p in found]}")
        return found

    def transitive_dependents(self, graph: DependencyGraph, target: Package) -> List[Package]:
        """Fecho transitivo dos dependentes, sem incluir o próprio `target`"""
        reverse = {}
        for pkg, dep in graph.edges():
            reverse.setdefault(dep, set()).add(pkg)

        seen: Set[Package] = set()
        queue = deque([target])
        while queue:
            current = queue.popleft()
            for pkg in reverse.get(current, ()):
                if pkg not in seen and pkg != target:
                    seen.add(pkg)
                    queue.append(pkg)
        return sorted(seen, key=Package.sort_key)
