"""
CSS Generator - builds a deduplicated stylesheet from per-node computed CSS.

Properties every node of a class defines are hoisted into the class rule;
whatever is left stays on the node's id rule.
"""

from typing import Dict, List, Optional

from codegen.base import CssNode, CssRule, DesignNode, get_class_name, get_id


def collect_css_nodes(node: DesignNode, css_nodes: Optional[List[CssNode]] = None) -> List[CssNode]:
    """Flatten the tree into (id, class name, css) entries in document order."""
    if css_nodes is None:
        css_nodes = []

    css_nodes.append(CssNode(
        id=get_id(node),
        class_name=get_class_name(node),
        css=dict(node.css or {}),
    ))
    for child in node.children or []:
        collect_css_nodes(child, css_nodes)

    return css_nodes


def _class_properties(css_nodes: List[CssNode]) -> Dict[str, Dict[str, str]]:
    classes: Dict[str, Dict[str, str]] = {}
    seen = set()

    for css_node in css_nodes:
        if css_node.class_name in seen:
            continue
        seen.add(css_node.class_name)

        same_class = [other for other in css_nodes if other.class_name == css_node.class_name]
        # Promoted when every node has the key; the first node's value wins
        shared = {
            key: value
            for key, value in css_node.css.items()
            if all(key in other.css for other in same_class)
        }
        if shared:
            classes[css_node.class_name] = shared

    return classes


def build_css_rules(node: DesignNode) -> List[CssRule]:
    """Id rules in document order followed by class rules in first-seen order."""
    css_nodes = collect_css_nodes(node)
    classes = _class_properties(css_nodes)

    id_rules: List[CssRule] = []
    for css_node in css_nodes:
        class_keys = classes.get(css_node.class_name, {})
        remaining = {
            key: value
            for key, value in css_node.css.items()
            if key not in class_keys
        }
        if remaining:
            id_rules.append(CssRule(selector=f"#{css_node.id}", properties=remaining))

    class_rules = [
        CssRule(selector=f".{class_name}", properties=properties)
        for class_name, properties in classes.items()
    ]
    return id_rules + class_rules


def generate_styles(node: DesignNode) -> str:
    """Render the stylesheet for a design tree."""
    return '\n'.join(rule.render() for rule in build_css_rules(node))
