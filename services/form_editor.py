"""
SIMS Dashboard - Nested Form Editor
Path-based copy-on-write edits for event drafts (judges, sections, criteria)
"""

from typing import Any, Callable, Dict, Sequence, Tuple, Union

PathKey = Union[str, int]
Path = Tuple[PathKey, ...]

# Zero-valued records appended by append_item, keyed by the name of the list
ITEM_TEMPLATES: Dict[str, Callable[[], Any]] = {
    "criteria": lambda: {"name": "", "description": "", "points": 0},
    "judges": lambda: "",
    "guidelines": lambda: "",
    "details": lambda: {"title": "", "criteria": []},
}


def _copy_container(container):
    if isinstance(container, dict):
        return dict(container)
    if isinstance(container, list):
        return list(container)
    raise TypeError(f"Cannot descend into {type(container).__name__}")


def _update_in(root, path: Sequence[PathKey], update: Callable[[Any], Any]):
    """
    Return a copy of ``root`` with ``update`` applied to the value at ``path``.

    Only the containers along the path are copied; every sibling branch is
    reused by reference.
    """
    if not path:
        return update(root)
    head, rest = path[0], path[1:]
    new_container = _copy_container(root)
    if isinstance(new_container, dict) and head not in new_container and not rest:
        new_container[head] = update(None)
    else:
        new_container[head] = _update_in(new_container[head], rest, update)
    return new_container


def _list_name(path: Path) -> str:
    for key in reversed(path):
        if isinstance(key, str):
            return key
    return ""


class NestedFormEditor:
    """Immutable edits for event records and the forms that build them"""

    def __init__(self, templates: Dict[str, Callable[[], Any]] = None):
        self.templates = templates or ITEM_TEMPLATES

    @staticmethod
    def get_value(root: dict, path: Path, default: Any = None) -> Any:
        """Read the value at ``path``, or ``default`` when any step is missing"""
        value = root
        for key in path:
            try:
                value = value[key]
            except (KeyError, IndexError, TypeError):
                return default
        return value

    def set_field(self, root: dict, path: Path, value: Any) -> dict:
        """Set the leaf at ``path`` (e.g. ``("details", 0, "criteria", 1, "points")``)"""
        if not path:
            raise KeyError("Path must name at least one field")
        return _update_in(root, tuple(path), lambda _old: value)

    def append_item(self, root: dict, path: Path) -> dict:
        """Append a zero-valued item to the list at ``path`` (created when missing)"""
        name = _list_name(tuple(path))
        if name not in self.templates:
            raise KeyError(f"No blank item defined for '{name}'")
        template = self.templates[name]
        return _update_in(root, tuple(path), lambda items: [*(items or []), template()])

    def remove_item(self, root: dict, path: Path, index: int) -> dict:
        """Remove the item at ``index`` from the list at ``path``"""
        def remove(items):
            items = list(items or [])
            if not -len(items) <= index < len(items):
                raise IndexError(f"No item {index} in {'/'.join(map(str, path))}")
            del items[index]
            return items

        return _update_in(root, tuple(path), remove)
