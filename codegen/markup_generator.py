"""
Markup Generator - renders a design tree as HTML or React (JSX) markup.
"""

from typing import Optional

from codegen.base import (
    DEFAULT_CONFIG,
    DesignNode,
    FrameworkTarget,
    GeneratorConfig,
    get_class_name,
    get_id,
    is_component,
)
from codegen.resolvers import resolve_tree
from codegen.tags import get_html_props, is_fragment, resolve_tag


def _class_attribute(target: FrameworkTarget) -> str:
    return 'className' if target == FrameworkTarget.REACT else 'class'


def _generate_node(
    node: DesignNode,
    target: FrameworkTarget,
    parent: Optional[DesignNode],
    config: GeneratorConfig,
) -> str:
    fragment = is_fragment(node)
    # Fragments are skipped in the parent chain
    child_parent = parent if fragment else node

    rendered_children = [
        _generate_node(child, target, child_parent, config)
        for child in node.children or []
    ]
    inner = '\n'.join(code for code in rendered_children if code)
    inner = f"{inner}{node.text or ''}".strip()

    if fragment:
        return inner

    resolved = resolve_tag(node, target, parent, config)
    if resolved.children:
        inner = resolved.children(inner).strip()

    if not resolved.tag:
        return inner

    attributes = ' '.join([
        f'id="{get_id(node)}"',
        f'{_class_attribute(target)}="{get_class_name(node)}"',
        *get_html_props(resolved.props),
    ])

    if not inner:
        if is_component(node) and target == FrameworkTarget.REACT:
            return f"<{resolved.tag} {attributes}/>"
        # Empty web components are left out
        return ''

    return f"<{resolved.tag} {attributes}>{inner}</{resolved.tag}>"


def generate_code(
    node: DesignNode,
    target: FrameworkTarget = FrameworkTarget.HTML,
    config: Optional[GeneratorConfig] = None,
    parent: Optional[DesignNode] = None,
) -> str:
    """Generate markup for a design tree.

    The tree is resolved into a copy first (icons, form texts and headlines
    become props), then rendered top-down. Containers with a single child
    are unwrapped and text inside mapped components is passed through.

    Args:
        node: root of the design tree; left untouched
        target: ``html`` for web components, ``react`` for JSX
        config: generator configuration
        parent: context node the root is rendered in, if any

    Returns:
        Unformatted markup string
    """
    config = config or DEFAULT_CONFIG
    target = FrameworkTarget(target)
    resolved = resolve_tree(node, config)
    return _generate_node(resolved, target, parent, config)
