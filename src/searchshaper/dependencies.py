"""Flattening of component dependency descriptions.

A search component declares which other components its query reacts to with a
nested "react" description, e.g. ``{"and": "price", "or": {"and": ["brand", "color"]}}``.
The surrounding layer needs the flat list of component ids to subscribe to.
"""

from typing import Any, Mapping, Optional


def flat_react_prop(react: Optional[Mapping[str, Any]], component_id: str) -> list[str]:
    """Collect every component id referenced by a react description.

    Strings are taken as ids, lists are appended as they are and nested
    mappings are walked recursively. The component's own id is removed so a
    component never depends on itself.

    Args:
        react: The react description, or None.
        component_id: Id of the component owning the description.

    Returns:
        Referenced component ids in declaration order.
    """
    flattened: list[str] = []

    def walk(node: Any) -> None:
        if not isinstance(node, Mapping):
            return
        for value in node.values():
            if not value:
                continue
            if isinstance(value, str):
                flattened.append(value)
            elif isinstance(value, (list, tuple)):
                flattened.extend(value)
            elif isinstance(value, Mapping):
                walk(value)

    walk(react)
    return [item for item in flattened if item != component_id]
