"""
Figma node adapter - converts Figma REST API nodes into DesignNode trees.

Mirrors what the plugin exports from the live document: names, ids, text,
variant/component properties, component names and (optionally) a flat
computed CSS map per node.
"""

import math
from typing import Any, Dict, List, Optional, Tuple

from codegen.base import DesignNode, NodeType


# ---------------------------------------------------------------------------
# CSS helpers
# ---------------------------------------------------------------------------

def _rgba_to_hex(color: Dict[str, float], opacity: float = 1) -> str:
    """Convert Figma RGBA color to hex, or rgba() when translucent."""
    r = int(color.get('r', 0) * 255)
    g = int(color.get('g', 0) * 255)
    b = int(color.get('b', 0) * 255)
    a = color.get('a', 1) * opacity

    if a < 1:
        return f"rgba({r}, {g}, {b}, {a:.2f})"
    return f"#{r:02x}{g:02x}{b:02x}"


def _calculate_gradient_angle(handle_positions: List[Dict[str, float]]) -> float:
    """Calculate CSS gradient angle (0deg = up, clockwise) from handle positions."""
    if not handle_positions or len(handle_positions) < 2:
        return 180

    start, end = handle_positions[0], handle_positions[1]
    dx = end.get('x', 0) - start.get('x', 0)
    dy = end.get('y', 0) - start.get('y', 0)
    angle = math.degrees(math.atan2(dy, dx))
    return round(90 + angle, 2)


def _gradient_to_css(fill: Dict[str, Any]) -> Optional[str]:
    fill_type = fill.get('type', '')
    gradient_stops = fill.get('gradientStops', [])
    if not gradient_stops:
        return None

    stops_str = ', '.join(
        f"{_rgba_to_hex(stop.get('color', {}))} {int(stop.get('position', 0) * 100)}%"
        for stop in gradient_stops
    )

    if fill_type == 'GRADIENT_LINEAR':
        angle = _calculate_gradient_angle(fill.get('gradientHandlePositions', []))
        return f"linear-gradient({int(angle)}deg, {stops_str})"
    elif fill_type == 'GRADIENT_RADIAL':
        return f"radial-gradient(circle, {stops_str})"
    elif fill_type == 'GRADIENT_ANGULAR':
        return f"conic-gradient({stops_str})"
    elif fill_type == 'GRADIENT_DIAMOND':
        # Approximated as radial
        return f"radial-gradient(ellipse, {stops_str})"
    return None


def _get_background_css(node: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """Return (css property, value) for the first visible fill."""
    for fill in node.get('fills', []):
        if not fill.get('visible', True):
            continue

        fill_type = fill.get('type', '')
        if fill_type == 'SOLID':
            return 'background-color', _rgba_to_hex(fill.get('color', {}), fill.get('opacity', 1))
        elif fill_type.startswith('GRADIENT_'):
            gradient_css = _gradient_to_css(fill)
            if gradient_css:
                return 'background', gradient_css

    return None, None


def _corner_radii_to_css(node: Dict[str, Any]) -> str:
    radii = node.get('rectangleCornerRadii')
    if radii and len(radii) == 4:
        tl, tr, br, bl = radii
        if tl == tr == br == bl:
            return f"{int(tl)}px" if tl else ''
        return f"{int(tl)}px {int(tr)}px {int(br)}px {int(bl)}px"

    corner_radius = node.get('cornerRadius', 0)
    if corner_radius:
        return f"{int(corner_radius)}px"
    return ''


BLEND_MODE_MAP = {
    'DARKEN': 'darken',
    'MULTIPLY': 'multiply',
    'LINEAR_BURN': 'color-burn',
    'COLOR_BURN': 'color-burn',
    'LIGHTEN': 'lighten',
    'SCREEN': 'screen',
    'LINEAR_DODGE': 'color-dodge',
    'COLOR_DODGE': 'color-dodge',
    'OVERLAY': 'overlay',
    'SOFT_LIGHT': 'soft-light',
    'HARD_LIGHT': 'hard-light',
    'DIFFERENCE': 'difference',
    'EXCLUSION': 'exclusion',
    'HUE': 'hue',
    'SATURATION': 'saturation',
    'COLOR': 'color',
    'LUMINOSITY': 'luminosity',
}

JUSTIFY_MAP = {'MIN': 'flex-start', 'CENTER': 'center', 'MAX': 'flex-end', 'SPACE_BETWEEN': 'space-between'}
ITEMS_MAP = {'MIN': 'flex-start', 'CENTER': 'center', 'MAX': 'flex-end', 'BASELINE': 'baseline'}


def _px(value: float) -> str:
    return f"{int(value) if float(value).is_integer() else round(value, 2)}px"


def _text_css(node: Dict[str, Any], css: Dict[str, str]) -> None:
    style = node.get('style', {})
    if style.get('fontFamily'):
        css['font-family'] = style['fontFamily']
    if style.get('fontSize'):
        css['font-size'] = _px(style['fontSize'])
    if style.get('fontWeight'):
        css['font-weight'] = str(int(style['fontWeight']))
    if style.get('lineHeightPx'):
        css['line-height'] = _px(style['lineHeightPx'])
    if style.get('letterSpacing'):
        css['letter-spacing'] = _px(style['letterSpacing'])

    text_align = style.get('textAlignHorizontal', 'LEFT')
    if text_align != 'LEFT':
        css['text-align'] = 'justify' if text_align == 'JUSTIFIED' else text_align.lower()

    for fill in node.get('fills', []):
        if fill.get('visible', True) and fill.get('type') == 'SOLID':
            css['color'] = _rgba_to_hex(fill.get('color', {}), fill.get('opacity', 1))
            break


def node_css(node: Dict[str, Any]) -> Dict[str, str]:
    """Flat computed CSS for a single Figma node."""
    css: Dict[str, str] = {}
    node_type = node.get('type', '')

    bbox = node.get('absoluteBoundingBox') or {}
    if bbox.get('width'):
        css['width'] = _px(bbox['width'])
    if bbox.get('height'):
        css['height'] = _px(bbox['height'])

    if node_type == NodeType.TEXT.value:
        _text_css(node, css)
    else:
        prop, value = _get_background_css(node)
        if prop:
            css[prop] = value

        for stroke in node.get('strokes', []):
            if stroke.get('visible', True) and stroke.get('type') == 'SOLID':
                weight = node.get('strokeWeight', 1)
                style = 'dashed' if node.get('strokeDashes') else 'solid'
                css['border'] = f"{_px(weight)} {style} {_rgba_to_hex(stroke.get('color', {}))}"
                break

        radius = _corner_radii_to_css(node)
        if radius:
            css['border-radius'] = radius

    opacity = node.get('opacity', 1)
    if opacity < 1:
        css['opacity'] = f"{opacity:.2f}"

    blend_mode = BLEND_MODE_MAP.get(node.get('blendMode', 'PASS_THROUGH'))
    if blend_mode:
        css['mix-blend-mode'] = blend_mode

    layout_mode = node.get('layoutMode')
    if layout_mode and layout_mode != 'NONE':
        css['display'] = 'flex'
        css['flex-direction'] = 'column' if layout_mode == 'VERTICAL' else 'row'
        if node.get('itemSpacing'):
            css['gap'] = _px(node['itemSpacing'])
        padding = [node.get(f'padding{side}', 0) for side in ('Top', 'Right', 'Bottom', 'Left')]
        if any(padding):
            css['padding'] = ' '.join(_px(value) for value in padding)
        css['justify-content'] = JUSTIFY_MAP.get(node.get('primaryAxisAlignItems', 'MIN'), 'flex-start')
        css['align-items'] = ITEMS_MAP.get(node.get('counterAxisAlignItems', 'MIN'), 'flex-start')

    return css


# ---------------------------------------------------------------------------
# Tree conversion
# ---------------------------------------------------------------------------

def _component_names(
    node: Dict[str, Any],
    components: Dict[str, Any],
    component_sets: Dict[str, Any],
) -> Tuple[Optional[str], Optional[str]]:
    """Return (main component name, component set name) of an instance."""
    component = components.get(node.get('componentId', ''), {})
    main_component_name = component.get('name')
    component_set = component_sets.get(component.get('componentSetId') or '', {})
    return main_component_name, component_set.get('name') or main_component_name


def _variable_modes(
    node: Dict[str, Any],
    variable_collections: Dict[str, Any],
) -> List[Dict[str, Any]]:
    """Explicit variable modes of a node, named when the collection is known."""
    modes = []
    for collection_id, mode_id in (node.get('explicitVariableModes') or {}).items():
        mode: Dict[str, Any] = {'collectionId': collection_id, 'modeId': mode_id}
        collection = variable_collections.get(collection_id)
        if collection:
            mode['collectionName'] = collection.get('name')
            for collection_mode in collection.get('modes', []):
                if collection_mode.get('modeId') == mode_id:
                    mode['foundModeName'] = collection_mode.get('name')
                    break
        modes.append(mode)
    return modes


def _font_name(style: Dict[str, Any]) -> Optional[Dict[str, str]]:
    family = style.get('fontFamily')
    if not family:
        return None
    font_style = style.get('fontStyle')
    if not font_style:
        # PostScript names look like "Inter-SemiBold"
        post_script_name = style.get('fontPostScriptName') or ''
        font_style = post_script_name.split('-', 1)[1] if '-' in post_script_name else ''
    return {'family': family, 'style': font_style}


def design_node_from_figma(
    node: Dict[str, Any],
    components: Optional[Dict[str, Any]] = None,
    component_sets: Optional[Dict[str, Any]] = None,
    with_css: bool = False,
    depth: int = -1,
    with_modes: bool = False,
    variable_collections: Optional[Dict[str, Any]] = None,
) -> DesignNode:
    """Convert a Figma REST node (and its subtree) into a DesignNode.

    Args:
        node: node JSON as returned by ``GET /v1/files/:key/nodes``
        components: the response's ``components`` map (id -> metadata)
        component_sets: the response's ``componentSets`` map
        with_css: attach a computed CSS map to every node
        depth: levels of children to convert; -1 for the whole subtree
        with_modes: attach explicitly set variable modes
        variable_collections: ``meta.variableCollections`` of
            ``GET /v1/files/:key/variables/local``, used to name modes

    Returns:
        DesignNode tree
    """
    components = components or {}
    component_sets = component_sets or {}
    variable_collections = variable_collections or {}
    node_type = node.get('type', '')

    result: Dict[str, Any] = {
        'type': node_type,
        'name': node.get('name', ''),
        'id': node.get('id', ''),
    }

    if with_css:
        result['css'] = node_css(node)

    if with_modes and node.get('explicitVariableModes'):
        result['modes'] = _variable_modes(node, variable_collections)

    if node_type == NodeType.INSTANCE.value:
        variant_properties: Dict[str, str] = {}
        component_properties: Dict[str, Any] = {}
        for key, prop in (node.get('componentProperties') or {}).items():
            if prop.get('type') == 'VARIANT':
                variant_properties[key] = str(prop.get('value', ''))
            else:
                component_properties[key.split('#')[0]] = prop.get('value', '')
        if variant_properties:
            result['variantProperties'] = variant_properties
        if component_properties:
            result['componentProperties'] = component_properties

        main_component_name, component_name = _component_names(node, components, component_sets)
        if main_component_name:
            result['mainComponentName'] = main_component_name
        if component_name:
            result['componentName'] = component_name

    if node_type == NodeType.TEXT.value:
        result['text'] = node.get('characters', '')
        font_name = _font_name(node.get('style') or {})
        if font_name:
            result['fontName'] = font_name

    children = node.get('children')
    if children and depth != 0:
        result['children'] = [
            design_node_from_figma(
                child, components, component_sets, with_css, depth - 1,
                with_modes, variable_collections,
            )
            for child in children
        ]

    return DesignNode.model_validate(result)
