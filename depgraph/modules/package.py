# depgraph/modules/package.py
"""
Identidade de um pacote no grafo: o par (name, version).

Dois pacotes são iguais somente se nome e versão forem idênticos
(comparação exata de strings, sem semântica de versão).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Package:
    name: str
    version: str

    @property
    def label(self) -> str:
        return f"{self.name} {self.version}"

    def sort_key(self) -> Tuple[str, str]:
        return (self.name, self.version)

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, text: str) -> "Package":
        """
        Aceita "name@version" ou "name version".
        """
        raw = (text or "").strip()
        if "@" in raw:
            name, _, version = raw.partition("@")
        else:
            parts = raw.split()
            if len(parts) != 2:
                raise ValueError(f"invalid package reference: {text!r} (use name@version)")
            name, version = parts
        name, version = name.strip(), version.strip()
        if not name or not version:
            raise ValueError(f"invalid package reference: {text!r} (use name@version)")
        return cls(name, version)
