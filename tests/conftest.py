"""Shared test fixtures for generator tests."""
import pytest

from codegen.base import DesignNode


@pytest.fixture
def text_in_frame():
    """Frame wrapping a single text layer."""
    return DesignNode.model_validate({
        'type': 'FRAME', 'name': 'Wrapper', 'id': '1',
        'children': [
            {'type': 'TEXT', 'name': 't', 'id': '2', 'text': 'Hello'},
        ],
    })


@pytest.fixture
def button_instance():
    """Button instance with prefix and a label text layer."""
    return DesignNode.model_validate({
        'type': 'INSTANCE', 'name': 'Button', 'id': '10:1',
        'variantProperties': {'Component': 'button', 'Prefix': 'db', 'Variant': 'Primary'},
        'children': [
            {'type': 'TEXT', 'name': 'Text', 'id': '10:2', 'text': 'Click'},
        ],
    })


@pytest.fixture
def icon_button():
    """Button instance with leading and trailing icon instances."""
    return DesignNode.model_validate({
        'type': 'INSTANCE', 'name': 'Button', 'id': '20:1',
        'variantProperties': {'component': 'button'},
        'children': [
            {'type': 'INSTANCE', 'name': 'icon-leading', 'id': '20:2', 'componentName': 'icon-star'},
            {'type': 'TEXT', 'name': 'Text', 'id': '20:4', 'text': 'Go'},
            {'type': 'INSTANCE', 'name': 'icon-trailing', 'id': '20:3', 'componentName': 'icon-arrow'},
        ],
    })


@pytest.fixture
def input_instance():
    """Input instance drawn with label, placeholder, required marker and info text."""
    return DesignNode.model_validate({
        'type': 'INSTANCE', 'name': 'Input', 'id': '30:1',
        'variantProperties': {'component': 'input', 'validation': 'invalid'},
        'children': [
            {'type': 'TEXT', 'name': 'Label', 'id': '30:2', 'text': 'E-Mail'},
            {
                'type': 'FRAME', 'name': 'Field', 'id': '30:3',
                'children': [
                    {'type': 'TEXT', 'name': 'Placeholder', 'id': '30:4', 'text': 'Enter mail'},
                    {'type': 'TEXT', 'name': 'Required', 'id': '30:5', 'text': '*'},
                ],
            },
            {
                'type': 'INSTANCE', 'name': 'Infotext', 'id': '30:6',
                'variantProperties': {'component': 'infotext'},
                'children': [
                    {'type': 'TEXT', 'name': 'Text', 'id': '30:7', 'text': 'Wrong format'},
                ],
            },
        ],
    })


@pytest.fixture
def notification_instance():
    """Notification with a headline layer and an icon visual."""
    return DesignNode.model_validate({
        'type': 'INSTANCE', 'name': 'Notification', 'id': '40:1',
        'variantProperties': {'component': 'notification', 'Visual': 'Icon'},
        'children': [
            {'type': 'TEXT', 'name': 'Headline', 'id': '40:2', 'text': 'Heads up'},
            {'type': 'TEXT', 'name': 'Text', 'id': '40:3', 'text': 'Body'},
        ],
    })


@pytest.fixture
def figma_instance_json():
    """Figma REST instance node with variant, boolean, text and instance-swap properties."""
    return {
        'id': '5:1',
        'name': 'Button',
        'type': 'INSTANCE',
        'componentId': '1:100',
        'explicitVariableModes': {'VariableCollectionId:9:1': '9:2'},
        'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 120, 'height': 40},
        'fills': [{'type': 'SOLID', 'visible': True, 'color': {'r': 1, 'g': 0, 'b': 0, 'a': 1}, 'opacity': 1}],
        'strokes': [],
        'cornerRadius': 8,
        'layoutMode': 'HORIZONTAL',
        'itemSpacing': 4,
        'paddingTop': 8, 'paddingRight': 16, 'paddingBottom': 8, 'paddingLeft': 16,
        'primaryAxisAlignItems': 'CENTER',
        'counterAxisAlignItems': 'CENTER',
        'componentProperties': {
            'component': {'type': 'VARIANT', 'value': 'button'},
            'Variant': {'type': 'VARIANT', 'value': 'Primary'},
            'Show Icon#12:0': {'type': 'BOOLEAN', 'value': True},
            'Icon#3:0': {'type': 'INSTANCE_SWAP', 'value': '12:345'},
            'Text#4:0': {'type': 'TEXT', 'value': 'Save Now'},
        },
        'children': [
            {
                'id': '5:2',
                'name': 'Text',
                'type': 'TEXT',
                'characters': 'Save',
                'absoluteBoundingBox': {'x': 16, 'y': 8, 'width': 40, 'height': 24},
                'fills': [{'type': 'SOLID', 'visible': True, 'color': {'r': 1, 'g': 1, 'b': 1, 'a': 1}}],
                'style': {'fontFamily': 'Inter', 'fontSize': 16, 'fontWeight': 600, 'lineHeightPx': 24},
            },
        ],
    }
