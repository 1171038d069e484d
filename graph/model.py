"""Graph data model recording which configuration file referenced which."""

from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple


class IncludeGraph:
    """
    A directed graph of include/require references between files.
    
    Nodes are canonical file paths, and edges represent 'source -> referenced'
    relationships. An edge is recorded even when the target was already
    queued, so cycles remain visible. Optional files that could not be
    opened are tracked separately as skipped.
    """
    
    def __init__(self):
        self._nodes: Dict[Path, None] = {}  # insertion ordered
        self._edges: Dict[Path, Dict[Path, bool]] = {}  # source -> {target: required}
        self._skipped: Set[Path] = set()
    
    @property
    def nodes(self) -> List[Path]:
        """Return all nodes in insertion order."""
        return list(self._nodes)
    
    @property
    def edges(self) -> Dict[Path, Set[Path]]:
        """Return adjacency list representation of edges."""
        return {k: set(v) for k, v in self._edges.items()}
    
    @property
    def skipped(self) -> Set[Path]:
        """Return optional files that could not be opened."""
        return self._skipped.copy()
    
    @property
    def root(self) -> Optional[Path]:
        """Return the first node added, which is the root file."""
        for node in self._nodes:
            return node
        return None
    
    def add_node(self, node: Path) -> None:
        """Add a node to the graph."""
        self._nodes.setdefault(node, None)
    
    def add_edge(self, source: Path, target: Path, required: bool = False) -> None:
        """
        Add a directed edge from source to target.
        
        Automatically adds both nodes to the graph. A reference that is
        required by any directive stays required.
        """
        self.add_node(source)
        self.add_node(target)
        
        targets = self._edges.setdefault(source, {})
        targets[target] = targets.get(target, False) or required
    
    def add_skipped(self, node: Path) -> None:
        """Record an optional file that could not be opened."""
        self.add_node(node)
        self._skipped.add(node)
    
    def is_skipped(self, node: Path) -> bool:
        return node in self._skipped
    
    def is_required(self, source: Path, target: Path) -> bool:
        """Check whether the reference from source to target was a ``#require``."""
        return self._edges.get(source, {}).get(target, False)
    
    def get_targets(self, source: Path) -> List[Path]:
        """Get the files referenced by source, in directive order."""
        return list(self._edges.get(source, {}))
    
    def get_sources(self, target: Path) -> Set[Path]:
        """Get all files that reference the target file."""
        return {source for source, targets in self._edges.items() if target in targets}
    
    def iter_edges(self) -> Iterator[Tuple[Path, Path]]:
        """Iterate over all edges as (source, target) tuples."""
        for source, targets in self._edges.items():
            for target in targets:
                yield source, target
    
    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)
    
    def __contains__(self, node: Path) -> bool:
        """Check if a node is in the graph."""
        return node in self._nodes
    
    def __repr__(self) -> str:
        edge_count = sum(len(t) for t in self._edges.values())
        return f"IncludeGraph(nodes={len(self._nodes)}, edges={edge_count}, skipped={len(self._skipped)})"
