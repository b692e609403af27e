"""
edge.py — Graph Edge
====================
Connects two nodes by id.

Design decisions:
  - `source` and `target` are node ids, NOT Node references.  This keeps
    edges serialisable and lets the Graph drop edges whose endpoints do
    not exist.
  - Traversal follows source → target only.  The builder still treats an
    edge as an undirected pair when checking for duplicates, which is
    what `connects` answers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : Id of the tail node ("from").
        target : Id of the head node ("to").
    """

    source: int
    target: int

    def connects(self, node_a: int, node_b: int) -> bool:
        """True if this edge links node_a ↔ node_b in either direction."""
        return {self.source, self.target} == {node_a, node_b}

    def touches(self, node_id: int) -> bool:
        return node_id in (self.source, self.target)

    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.target}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(source=int(data["from"]), target=int(data["to"]))

    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target})"
