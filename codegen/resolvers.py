"""
Structural resolvers - fold special child layers into component properties.

Icons, required markers, placeholder/label/value texts, info texts and
notification headlines are drawn as child layers in the design but are
props in code. Each resolver finds those layers, turns them into a
variant property on the owning INSTANCE and removes them from the tree.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

from codegen.base import (
    DEFAULT_CONFIG,
    DesignNode,
    GeneratorConfig,
    is_component,
    slugify,
)
from codegen.properties import normalize_properties

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class ResolvedIcons:
    leading_icon: Optional[str] = None
    trailing_icon: Optional[str] = None


# ---------------------------------------------------------------------------
# Generic search
# ---------------------------------------------------------------------------

def resolve_nodes_recursive(
    node: DesignNode,
    matches: Callable[[DesignNode], bool],
    derive: Optional[Callable[[List[DesignNode]], T]] = None,
    keep: Optional[Callable[[DesignNode], bool]] = None,
) -> Optional[T]:
    """Find the first subtree whose direct children match and consume them.

    Direct children of ``node`` are checked first. If any match, ``derive``
    runs over the matched children, the children rejected by ``keep``
    (default: the matched ones) are removed and the derived value returned.
    Otherwise the search descends into each child in document order and
    stops at the first one yielding a value.
    """
    if not node.children:
        return None

    found = [child for child in node.children if matches(child)]
    if found:
        resolved = derive(found) if derive else None
        keep = keep or (lambda child: not matches(child))
        node.children = [child for child in node.children if keep(child)]
        return resolved

    for child in node.children:
        if child.children:
            resolved = resolve_nodes_recursive(child, matches, derive, keep)
            if resolved:
                return resolved

    return None


def _join_texts(found: List[DesignNode]) -> str:
    return '\n'.join(child.text or '' for child in found)


def _set_property(node: DesignNode, key: str, value: str) -> None:
    node.variant_properties = {**(node.variant_properties or {}), key: value}
    logger.debug("Resolved %s=%r on %s", key, value, node.id)


# ---------------------------------------------------------------------------
# Icons
# ---------------------------------------------------------------------------

def is_icon_child(node: DesignNode) -> bool:
    return 'icon' in node.name.lower()


def get_next_instance(node: DesignNode) -> Optional[DesignNode]:
    """First INSTANCE in the subtree, the node itself included."""
    if is_component(node):
        return node
    for child in node.children or []:
        instance = get_next_instance(child)
        if instance:
            return instance
    return None


def get_icons(icon_children: List[DesignNode]) -> Optional[ResolvedIcons]:
    leading_icon = None
    trailing_icon = None

    for icon_child in icon_children:
        instance = get_next_instance(icon_child)
        if not instance:
            continue

        icon_variant = slugify(icon_child.name)
        icon_name = slugify(instance.component_name or 'unknown')
        if icon_name.startswith('icon-'):
            icon_name = icon_name[len('icon-'):]

        if 'leading' in icon_variant:
            leading_icon = icon_name
        if 'trailing' in icon_variant:
            trailing_icon = icon_name
        if 'leading' not in icon_variant and 'trailing' not in icon_variant:
            logger.debug("Dropping unplaced icon %s in %s", icon_name, icon_child.id)

    if leading_icon or trailing_icon:
        return ResolvedIcons(leading_icon=leading_icon, trailing_icon=trailing_icon)
    return None


def resolve_icons(node: DesignNode) -> None:
    resolved = resolve_nodes_recursive(node, is_icon_child, get_icons)
    if not resolved:
        return
    if resolved.trailing_icon:
        _set_property(node, 'iconAfter', resolved.trailing_icon)
    if resolved.leading_icon:
        _set_property(node, 'icon', resolved.leading_icon)


# ---------------------------------------------------------------------------
# Form elements
# ---------------------------------------------------------------------------

def _is_truthy(value: Optional[str]) -> bool:
    return bool(value) and value != 'false'


def _resolve_text(node: DesignNode, matches: Callable[[DesignNode], bool]) -> Optional[str]:
    return resolve_nodes_recursive(node, matches, _join_texts)


def _first_child_texts(found: List[DesignNode]) -> str:
    return '\n'.join(
        (child.children[0].text or '') if child.children else ''
        for child in found
    )


def resolve_input_nodes(node: DesignNode, config: Optional[GeneratorConfig] = None) -> None:
    config = config or DEFAULT_CONFIG

    required = resolve_nodes_recursive(
        node,
        lambda child: child.text == '*',
        lambda found: len(found) > 0,
    )
    if required:
        _set_property(node, 'required', 'true')

    placeholder = _resolve_text(node, lambda child: 'placeholder' in slugify(child.name))
    if placeholder:
        _set_property(node, 'placeholder', placeholder)

    value = _resolve_text(node, lambda child: slugify(child.name) == 'input-text')
    if value:
        _set_property(node, 'value', value)

    label = _resolve_text(node, lambda child: slugify(child.name) == 'label')
    if label:
        _set_property(node, 'label', label)

    # Screen reader labels are consumed either way but only used as fallback
    screen_reader_label = _resolve_text(
        node, lambda child: slugify(child.name) == 'label-screenreader'
    )
    if not label and screen_reader_label:
        _set_property(node, 'label', screen_reader_label)

    properties = normalize_properties(node, config=config)
    validation = properties.get('validation')
    show_message = properties.get('show-message')
    if not (validation or _is_truthy(show_message)):
        return

    info_text = resolve_nodes_recursive(
        node,
        lambda child: normalize_properties(child, config=config).get('component') == 'infotext',
        _first_child_texts,
    )
    if info_text:
        key = 'message'
        if validation == 'valid':
            key = 'validMessage'
        elif validation == 'invalid':
            key = 'invalidMessage'
        _set_property(node, key, info_text)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

def resolve_notification_nodes(node: DesignNode) -> None:
    headline = _resolve_text(node, lambda child: slugify(child.name) == 'headline')
    if headline:
        _set_property(node, 'headlinePlain', headline)


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------

def resolve_node(node: DesignNode, config: Optional[GeneratorConfig] = None) -> None:
    """Run every resolver on one node, in place. Non-instances are left alone."""
    if not is_component(node) or not node.children:
        return
    resolve_icons(node)
    resolve_input_nodes(node, config)
    resolve_notification_nodes(node)


def _resolve_in_place(node: DesignNode, config: Optional[GeneratorConfig]) -> None:
    resolve_node(node, config)
    for child in node.children or []:
        _resolve_in_place(child, config)


def resolve_tree(node: DesignNode, config: Optional[GeneratorConfig] = None) -> DesignNode:
    """Return a resolved copy of the tree; the input is never modified.

    Nodes are resolved top-down, so an instance consumes matching layers
    before any nested instance gets to see them.
    """
    resolved = node.model_copy(deep=True)
    _resolve_in_place(resolved, config)
    return resolved
