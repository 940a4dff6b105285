"""
Tag resolution - decides which element or component a node is emitted as.
"""

import logging
from html import escape
from typing import Dict, List, Optional

from codegen.base import (
    DEFAULT_CONFIG,
    DesignNode,
    FrameworkTarget,
    GeneratorConfig,
    NodeType,
    ResolvedTag,
    is_component,
    to_pascal_case,
)
from codegen.properties import normalize_properties, resolve_props_children

logger = logging.getLogger(__name__)

CONTAINER_TYPES = (NodeType.FRAME.value, NodeType.GROUP.value)


def _custom_tag(config: GeneratorConfig) -> ResolvedTag:
    key, value = config.custom_component_attribute
    return ResolvedTag(tag='div', props={key: value})


def get_component(
    node: DesignNode,
    target: FrameworkTarget,
    parent: Optional[DesignNode] = None,
    config: Optional[GeneratorConfig] = None,
) -> ResolvedTag:
    """Map an INSTANCE to its code component via the ``component`` property."""
    config = config or DEFAULT_CONFIG
    props = normalize_properties(node, target, config)

    component = props.pop('component', None)
    if not component:
        logger.debug("No component mapping for %s (%s)", node.id, node.name)
        return _custom_tag(config)

    if component == 'card' and is_component(parent):
        # A card inside another component is only its visual frame
        logger.debug("Suppressing nested card %s", node.id)
        return ResolvedTag()

    prefix = props.pop('prefix', None) or config.prefix
    if target == FrameworkTarget.REACT:
        tag = f"{prefix.upper() if prefix else ''}{to_pascal_case(component)}"
    else:
        tag = f"{prefix}-{component}" if prefix else component

    children = None
    props_children = props.pop('children', None)
    if props_children:
        children = resolve_props_children(props_children, target)

    return ResolvedTag(tag=tag, props=props, children=children)


def resolve_tag(
    node: DesignNode,
    target: FrameworkTarget,
    parent: Optional[DesignNode] = None,
    config: Optional[GeneratorConfig] = None,
) -> ResolvedTag:
    config = config or DEFAULT_CONFIG
    node_type = node.type

    if node_type in CONTAINER_TYPES:
        return ResolvedTag(tag='div')
    elif node_type == NodeType.TEXT.value:
        if is_component(parent) and 'component' in normalize_properties(parent, target, config):
            # Text is rendered by the parent component
            return ResolvedTag()
        return ResolvedTag(tag='p')
    elif is_component(node):
        return get_component(node, target, parent, config)

    return _custom_tag(config)


def is_fragment(node: DesignNode) -> bool:
    """Containers with a single child are unwrapped."""
    return node.type in CONTAINER_TYPES and len(node.children or []) == 1


def get_html_props(props: Optional[Dict[str, str]] = None) -> List[str]:
    """Flatten props: ``"false"`` is dropped, ``"true"`` becomes a bare attribute.

    Other values are HTML-escaped, they may carry free text from the design.
    """
    flat_props = []
    for key, value in (props or {}).items():
        if value == 'false':
            continue
        elif value == 'true':
            flat_props.append(key)
        else:
            flat_props.append(f'{key}="{escape(value)}"')
    return flat_props
