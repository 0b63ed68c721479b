"""
Helpers for nested dict structures addressed by key paths.

A path is a sequence of keys, outermost first. Plain nested updates fail when
an intermediate level does not exist yet; the writers here create missing
levels as empty dicts instead.
"""

from typing import Any, Dict, Sequence


Nested = Dict[Any, Any]

_MISSING = object()


def values_equal(a: Any, b: Any) -> bool:
    """
    Compare two stored values.

    Values whose comparison does not produce a plain truth value (arrays,
    for instance) only compare equal to themselves.
    """
    if a is b:
        return True
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False


def is_identity(value: Any, identity: Any) -> bool:
    """Check whether a value need not be stored because it equals the identity."""
    return values_equal(value, identity)


def _level(structure: Nested, key: Any, path: Sequence[Any]) -> Nested:
    level = structure.get(key, _MISSING)
    if level is _MISSING:
        return {}
    if not isinstance(level, dict):
        raise TypeError(f"Cannot descend into leaf {level!r} at key {key!r} of path {list(path)}")
    return level


def write_at_path(structure: Nested, path: Sequence[Any], value: Any) -> Nested:
    """
    Write a value at a nested location, creating missing levels.

    The input structure is left untouched: only the dicts along the path are
    copied, everything else is shared.

    Args:
        structure: Nested dict to write into
        path: Keys from the outermost level to the leaf
        value: Value to store

    Returns:
        New nested dict holding value at path

    Example:
        write_at_path({}, [1, 2, 3], 4) -> {1: {2: {3: 4}}}
    """
    if not path:
        raise ValueError("Path must contain at least one key")

    key = path[0]
    result = dict(structure)
    if len(path) == 1:
        result[key] = value
    else:
        result[key] = write_at_path(_level(structure, key, path), path[1:], value)
    return result


def put_at_path(structure: Nested, path: Sequence[Any], value: Any) -> Nested:
    """
    In-place variant of write_at_path for structures still being built.

    Returns the same structure for convenience.
    """
    if not path:
        raise ValueError("Path must contain at least one key")

    level = structure
    for key in path[:-1]:
        child = level.get(key, _MISSING)
        if child is _MISSING:
            child = level[key] = {}
        elif not isinstance(child, dict):
            raise TypeError(f"Cannot descend into leaf {child!r} at key {key!r} of path {list(path)}")
        level = child
    level[path[-1]] = value
    return structure


def get_at_path(structure: Nested, path: Sequence[Any], default: Any = None) -> Any:
    """Read the value at path, or default if any level is missing."""
    level = structure
    for key in path:
        if not isinstance(level, dict) or key not in level:
            return default
        level = level[key]
    return level


def remove_at_path(structure: Nested, path: Sequence[Any]) -> Nested:
    """
    Remove the entry at path, dropping branches that become empty.

    The input structure is left untouched. Removing a missing entry returns
    an equal structure.
    """
    if not path:
        raise ValueError("Path must contain at least one key")

    key = path[0]
    if key not in structure:
        return structure

    result = dict(structure)
    if len(path) == 1:
        del result[key]
        return result

    child = remove_at_path(_level(structure, key, path), path[1:])
    if child:
        result[key] = child
    else:
        del result[key]
    return result


def prune_identity(contents: Nested, depth: int, identity: Any) -> Nested:
    """
    Drop identity leaves and empty branches from nested contents.

    Args:
        contents: Nested dict to prune
        depth: Number of nesting levels (the tensor order)
        identity: Value that need not be stored

    Returns:
        New pruned nested dict
    """
    pruned = {}
    for key, value in contents.items():
        if depth <= 1:
            if not is_identity(value, identity):
                pruned[key] = value
        else:
            child = prune_identity(value, depth - 1, identity)
            if child:
                pruned[key] = child
    return pruned


def iter_leaves(contents: Nested, depth: int, prefix: tuple = ()):
    """Yield (coordinates, value) for every stored leaf, outer-to-inner keys."""
    for key in sorted(contents):
        coordinates = prefix + (key,)
        if depth <= 1:
            yield coordinates, contents[key]
        else:
            yield from iter_leaves(contents[key], depth - 1, coordinates)
