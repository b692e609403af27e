"""
node.py — Graph Node
====================
A labelled point on the canvas.

Design decisions:
  - Nodes are frozen.  A trace holds a reference to the Graph it was
    computed against, so nothing inside that graph may change while
    the trace is alive.  "Moving" a node means building a new one
    (see `moved_to`).
  - `id` is an integer: traversal engines sort neighbours by id to get
    a reproducible visiting order.
  - `label` is what the user typed.  Uniqueness is case-insensitive and
    enforced by the builder, not here; `key` gives the normalised form.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id    : Stable integer identity for the graph's lifetime.
        label : Human-readable name shown on the canvas.
        x, y  : Canvas coordinates (pixels in a 600 × 400 viewBox).
    """

    id:    int
    label: str
    x:     float = 0.0
    y:     float = 0.0

    @property
    def key(self) -> str:
        """Normalised label used for case-insensitive lookups."""
        return self.label.strip().lower()

    def moved_to(self, x: float, y: float) -> "Node":
        return replace(self, x=x, y=y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            id=int(data["id"]),
            label=str(data.get("label", data["id"])),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
        )

    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.1f},{self.y:.1f}))"
