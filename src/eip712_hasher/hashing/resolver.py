"""
Struct dependency resolution.

EIP-712 fixes the canonical type string by listing the primary type first
and then every transitively referenced struct in ascending name order. This
module computes that set from a name-indexed table of ``StructType`` and
rejects unknown references and cycles before any hashing happens.
"""

from typing import List, Mapping, Set

from ..engine.exceptions import SchemaError
from .types import StructType


def find_dependencies(primary_type: str, struct_types: Mapping[str, StructType]) -> List[str]:
    """
    Return the structs reachable from ``primary_type``, sorted by name.

    The traversal is depth-first over member references (array elements
    included). A reference back to a struct still on the current path is a
    cycle; a struct referencing itself directly is not, since it never
    appears among its own dependencies.

    Args:
        primary_type: Name of the struct to resolve.
        struct_types: Parsed type table.

    Returns:
        Dependency names in ascending order, ``primary_type`` excluded.

    Raises:
        SchemaError: If a referenced type is missing or the graph is cyclic.
    """
    if primary_type not in struct_types:
        raise SchemaError(f"unknown type {primary_type}")

    visited: Set[str] = set()
    path: List[str] = []

    def visit(name: str) -> None:
        path.append(name)
        for ref in struct_types[name].references():
            if ref == name:
                continue
            if ref in path:
                cycle = " -> ".join(path[path.index(ref):] + [ref])
                raise SchemaError(f"cyclic type dependency: {cycle}")
            if ref not in struct_types:
                raise SchemaError(f"unknown type {ref} referenced by {name}")
            if ref not in visited:
                visited.add(ref)
                visit(ref)
        path.pop()

    visit(primary_type)
    visited.discard(primary_type)
    return sorted(visited)


def referenced_structs(primary_type: str, struct_types: Mapping[str, StructType]) -> List[StructType]:
    """Primary struct followed by its sorted dependencies."""
    names = [primary_type] + find_dependencies(primary_type, struct_types)
    return [struct_types[name] for name in names]
