"""
Property normalization - turns variant/component properties into attributes.
"""

from typing import Callable, Dict, List, Optional

from codegen.base import (
    DEFAULT_CONFIG,
    DesignNode,
    FrameworkTarget,
    GeneratorConfig,
    slugify,
    to_camel_case,
)


def _clean_value(value: str, clean_key: str) -> str:
    """Drop the ``def-`` marker and a repeated key from a slugified value."""
    if value.startswith('def-'):
        value = value[len('def-'):]
    if value.startswith(f"{clean_key}-"):
        value = value[len(clean_key) + 1:]
    if value.endswith(f"-{clean_key}"):
        value = value[:-(len(clean_key) + 1)]
    return value.strip()


def _get_component_properties(
    component_properties: Optional[Dict[str, object]],
    config: GeneratorConfig,
) -> Dict[str, str]:
    """Pick the allow-listed boolean properties that map to attributes.

    Text and instance-swap properties are design-time content (free text,
    node ids) and are never emitted.
    """
    properties: Dict[str, str] = {}
    if not component_properties:
        return properties

    for key, value in component_properties.items():
        if key.startswith(config.design_variable_marker):
            continue
        if key.startswith(config.or_property_marker):
            # "OR" booleans only steer the designer's layer visibility
            continue
        clean_key = slugify(key)
        if clean_key in config.component_property_keys:
            properties[clean_key] = slugify(str(value)).strip()
    return properties


def normalize_properties(
    node: DesignNode,
    target: Optional[FrameworkTarget] = None,
    config: Optional[GeneratorConfig] = None,
) -> Dict[str, str]:
    """Clean and merge a node's properties into valid attribute names and values.

    Args:
        node: node whose ``variantProperties`` / ``componentProperties`` are read
        target: markup flavor; ``react`` renames uncontrolled props and camel-cases keys
        config: generator configuration

    Returns:
        Ordered attribute map. Never mutates the node.
    """
    config = config or DEFAULT_CONFIG
    properties: Dict[str, str] = {}

    for key, value in (node.variant_properties or {}).items():
        # Design variables are token bindings, not props
        if key.startswith(config.design_variable_marker):
            continue

        clean_key = slugify(key)
        if clean_key in config.value_exceptions:
            clean_value = value
        else:
            clean_value = _clean_value(slugify(value), clean_key)

        if target == FrameworkTarget.REACT:
            if clean_key == 'value':
                clean_key = 'defaultValue'
            elif clean_key == 'checked':
                clean_key = 'defaultChecked'

        # Notification visual
        if clean_key == 'visual':
            if clean_value == 'icon':
                clean_key, clean_value = 'icon', config.default_icon
            elif clean_value == 'image':
                clean_key, clean_value = 'image', config.default_image

        properties[clean_key] = clean_value

    properties.update(_get_component_properties(node.component_properties, config))

    if target == FrameworkTarget.REACT:
        properties = {to_camel_case(key): value for key, value in properties.items()}

    return properties


def resolve_props_children(children: str, target: FrameworkTarget) -> Callable[[str], str]:
    """Build the child-content template for props like ``children=checkbox-radio``.

    The first matching element wraps the text, the remaining ones are added
    as a comment so the author can pick another one.
    """
    def render(text: str) -> str:
        elements: List[str] = []
        for child in children.split('-'):
            is_checkbox = 'checkbox' in child
            if is_checkbox or 'radio' in child:
                input_type = 'checkbox' if is_checkbox else 'radio'
                elements.append(f'<label>{text}<input type="{input_type}"/></label>')
            elif 'button' in child:
                elements.append(f'<button>{text}</button>')

        if not elements:
            return text

        first, alternatives = elements[0], elements[1:]
        if not alternatives:
            return first

        open_comment, close_comment = ('<!--', '-->') if target == FrameworkTarget.HTML else ('{/*', '*/}')
        return '\n'.join([
            first,
            open_comment,
            'You could use those elements as well',
            *alternatives,
            close_comment,
        ])

    return render
