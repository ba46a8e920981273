"""Directed graph view of a validated martial system.

Each node is a (state, role) pair and each edge is one action taken
within a sequence. The graph can be analysed or exported as JSON or as
Graphviz DOT text.
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from martiallang.semantic import MartialSystem


@dataclass(frozen=True, order=True)
class Node:
    """A state taken in a given role."""

    state: str
    role: str

    def id(self) -> str:
        """Return the node's identifier, e.g. ``Mount[Top]``."""
        return f"{self.state}[{self.role}]"

    def _as_dict(self) -> dict[str, str]:
        return {"state": self.state, "role": self.role}


@dataclass(frozen=True)
class Edge:
    """A transition made by an action belonging to a sequence."""

    from_: Node
    to: Node
    action: str
    sequence: str

    def _as_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_._as_dict(),
            "to": self.to._as_dict(),
            "action": self.action,
            "sequence": self.sequence,
        }


@dataclass(frozen=True)
class GraphStatistics:
    """Counts and notable nodes of a graph."""

    node_count: int
    edge_count: int
    self_loops: int
    source_nodes: list[Node] = field(default_factory=list)
    sink_nodes: list[Node] = field(default_factory=list)
    isolated_nodes: list[Node] = field(default_factory=list)


@dataclass
class MartialGraph:
    """A directed graph of positions and the actions between them."""

    system_name: str
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    groups: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_system(cls, system: MartialSystem) -> MartialGraph:
        """Build the graph of every step of every sequence in ``system``."""
        nodes: set[Node] = set()
        edges: list[Edge] = []
        for seq_name, sequence in system.sequences.items():
            for step in sequence.steps:
                source = Node(step.from_.state, step.from_.role)
                target = Node(step.to.state, step.to.role)
                nodes.update((source, target))
                edges.append(Edge(source, target, step.action_name, seq_name))
        return cls(
            system_name=system.name,
            nodes=sorted(nodes),
            edges=edges,
            groups={name: list(states) for name, states in system.groups.items()},
        )

    def _successors(self, node: Node) -> list[Node]:
        return [edge.to for edge in self.edges if edge.from_ == node]

    def reachable_from(self, start: Node) -> set[Node]:
        """Return every node reachable from ``start``, including ``start``."""
        reachable: set[Node] = set()
        pending = [start]
        while pending:
            current = pending.pop()
            if current in reachable:
                continue
            reachable.add(current)
            pending.extend(n for n in self._successors(current) if n not in reachable)
        return reachable

    def find_unreachable_nodes(self) -> list[Node]:
        """Return nodes reached neither as an edge source nor from one."""
        if not self.nodes:
            return []
        sources = {edge.from_ for edge in self.edges}
        reachable = set(sources)
        for source in sources:
            reachable |= self.reachable_from(source)
        return [node for node in self.nodes if node not in reachable]

    def _as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "system_name": self.system_name,
            "nodes": [node._as_dict() for node in self.nodes],
            "edges": [edge._as_dict() for edge in self.edges],
        }
        if self.groups:
            data["groups"] = {name: list(states) for name, states in self.groups.items()}
        return data

    def to_json(self) -> str:
        """Return the graph as indented JSON."""
        return json.dumps(self._as_dict(), indent=2, ensure_ascii=False)

    def to_dot(self) -> str:
        """Return the graph in Graphviz DOT format."""
        lines = [
            f'digraph "{self.system_name}" {{',
            "  rankdir=LR;",
            "  node [shape=box, style=rounded];",
            "",
        ]
        grouped: set[str] = set()

        for group_name in sorted(self.groups):
            group_states = self.groups[group_name]
            lines.append(f"  subgraph cluster_{group_name} {{")
            lines.append(f'    label="{group_name}";')
            lines.append("    style=dashed;")
            lines.append("    color=grey;")
            for node in self.nodes:
                if node.state in group_states:
                    lines.append(
                        f'    "{node.id()}" [label="{node.state}\\n[{node.role}]"];'
                    )
                    grouped.add(node.id())
            lines.append("  }")
            lines.append("")

        for node in self.nodes:
            if node.id() not in grouped:
                lines.append(f'  "{node.id()}" [label="{node.state}\\n[{node.role}]"];')

        lines.append("")
        for edge in self.edges:
            lines.append(
                f'  "{edge.from_.id()}" -> "{edge.to.id()}" [label="{edge.action}"];'
            )
        lines.append("}")
        return "\n".join(lines) + "\n"

    def statistics(self) -> GraphStatistics:
        """Compute node and edge counts, self-loops, sources, sinks and isolated nodes."""
        out_degree = Counter(edge.from_ for edge in self.edges)
        in_degree = Counter(edge.to for edge in self.edges)
        self_loops = sum(1 for edge in self.edges if edge.from_ == edge.to)
        return GraphStatistics(
            node_count=len(self.nodes),
            edge_count=len(self.edges),
            self_loops=self_loops,
            source_nodes=[
                n for n in self.nodes if in_degree[n] == 0 and out_degree[n] > 0
            ],
            sink_nodes=[
                n for n in self.nodes if out_degree[n] == 0 and in_degree[n] > 0
            ],
            isolated_nodes=[
                n for n in self.nodes if in_degree[n] == 0 and out_degree[n] == 0
            ],
        )