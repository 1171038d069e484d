"""ASCII tree-style exporter for include graphs."""

from pathlib import Path
from typing import List, Optional, Set, Tuple

from graph.model import IncludeGraph


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_ascii(
    graph: IncludeGraph,
    base: Optional[Path] = None,
    style: str = "tree",
    include_skipped: bool = True,
) -> str:
    """
    Convert an include graph to an ASCII tree starting at the root file.
    
    Args:
        graph: The include graph recorded during a load.
        base: Optional base path for relative path display. Defaults to the
            root file's directory.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        include_skipped: If True, show optional files that could not be
            opened, marked ``[SKIPPED]``.
    
    Returns:
        ASCII tree string. Files reached through a cycle are marked ``[*]``
        and not expanded again; ``#require`` references are marked
        ``[required]``.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)
    
    root = graph.root
    if root is None:
        return ""
    if base is None:
        base = root.parent
    
    # Root-level files: the first root, then any given on the command line
    # that nothing references.
    referenced: Set[Path] = set()
    for _, target in graph.iter_edges():
        referenced.add(target)
    top = [root] + [node for node in graph.nodes if node not in referenced and node != root]
    
    lines: List[str] = []
    for i, node in enumerate(top):
        _render_node(
            graph=graph,
            node=node,
            base=base,
            prefix="",
            is_last=True,
            chars=chars,
            visited=set(),
            lines=lines,
            is_root=True,
            required=True,
            include_skipped=include_skipped,
        )
        
        if i < len(top) - 1:
            lines.append("")
    
    return "\n".join(lines)


def _render_node(
    graph: IncludeGraph,
    node: Path,
    base: Path,
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    visited: Set[Path],
    lines: List[str],
    is_root: bool = False,
    required: bool = False,
    include_skipped: bool = True,
) -> None:
    """
    Recursively render a node and the files it references.
    
    Args:
        graph: The include graph.
        node: Current node to render.
        base: Base path for display.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child of its parent.
        chars: Character set (branch, last, vertical, space).
        visited: Nodes on the current path (to detect cycles).
        lines: Output lines list (modified in place).
        is_root: Whether this is a root-level node.
        required: Whether the reference to this node was a ``#require``.
        include_skipped: If True, show skipped optional files.
    """
    branch, last, vertical, space = chars
    
    markers = ""
    if required and not is_root:
        markers += " [required]"
    if graph.is_skipped(node):
        markers += " [SKIPPED]"
    is_cycle = node in visited
    if is_cycle:
        markers += " [*]"
    
    display_path = _get_display_path(node, base)
    if is_root:
        lines.append(f"{display_path}{markers}")
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{display_path}{markers}")
    
    if is_cycle:
        return
    
    visited.add(node)
    
    children = graph.get_targets(node)
    if not include_skipped:
        children = [child for child in children if not graph.is_skipped(child)]
    
    if is_root:
        new_prefix = ""
    else:
        new_prefix = prefix + (space if is_last else vertical)
    
    for index, child in enumerate(children):
        _render_node(
            graph=graph,
            node=child,
            base=base,
            prefix=new_prefix,
            is_last=(index == len(children) - 1),
            chars=chars,
            visited=visited,
            lines=lines,
            required=graph.is_required(node, child),
            include_skipped=include_skipped,
        )
    
    # Allow the same file under different branches; only a file that
    # appears on its own ancestor path is a cycle.
    visited.discard(node)


def _get_display_path(node: Path, base: Path) -> str:
    """Get the display path for a node."""
    try:
        rel_path = node.relative_to(base)
        return str(rel_path).replace("\\", "/")
    except ValueError:
        return str(node).replace("\\", "/")
