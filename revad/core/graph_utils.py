"""
Graph utilities
Printing and analysing the structure of a recorded expression graph.
"""

from collections import Counter
from typing import Dict, List

import numpy as np

from . import tape as tape_mod
from .var import Var


def _active(tape):
    return tape if tape is not None else tape_mod.global_tape


def get_graph_stats(tape=None) -> Dict:
    """
    Statistics of a recorded graph (nothing is printed).

    Fan-in counts the operands of each recorded node; fan-out counts how
    many recorded nodes use each recorded node. Only nodes still owned by
    some Var or parent are counted; leaves and constants are never on the
    tape.
    """
    nodes = _active(tape).nodes
    if not nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(nodes)
    n_edges = sum(len(node.operands) for node in nodes)

    fan_ins = [len(node.operands) for node in nodes]

    position = {node: i for i, node in enumerate(nodes)}
    fan_outs = [0] * n_nodes
    for node in nodes:
        for p in node.operands:
            if p in position:
                fan_outs[position[p]] += 1

    op_counter = Counter(node.op_tag for node in nodes)

    return {
        'nodes': n_nodes,
        'edges': n_edges,
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def reachable_nodes(y: Var) -> int:
    """Number of distinct nodes (leaves and constants included) reachable from y."""
    seen = set()
    stack = [y._node]
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        stack.extend(node.operands)
    return len(seen)


def format_graph(tape=None, max_nodes: int = 20) -> str:
    """One line per recorded node: index, op tag, value and operands."""
    nodes = _active(tape).nodes
    if not nodes:
        return "Empty graph"

    lines: List[str] = []
    for node in nodes[:max_nodes]:
        operands = ", ".join(p.label() for p in node.operands)
        lines.append(f"Node {node.index:4d}: {node.op_tag:8s} "
                     f"({float(node.value):12.6g}) <- [{operands}]")
    if len(nodes) > max_nodes:
        lines.append(f"... ({len(nodes) - max_nodes} more nodes)")
    return "\n".join(lines)


def print_graph_summary(tape=None, detailed: bool = False) -> Dict:
    """
    Print a summary of the recorded graph.

    Args:
        tape: the tape to summarise (defaults to the active one)
        detailed: also print the node list for graphs of up to 100 nodes

    Returns:
        the statistics dictionary from get_graph_stats()
    """
    stats = get_graph_stats(tape)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*60)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*60)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and stats['nodes'] <= 100:
        print()
        print(format_graph(tape, max_nodes=100))

    print("="*60 + "\n")
    return stats
