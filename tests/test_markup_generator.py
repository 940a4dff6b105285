"""Tests for the HTML/React markup generator."""
from codegen.base import DesignNode, FrameworkTarget, GeneratorConfig
from codegen.markup_generator import generate_code


class TestPlainNodes:
    """Verify frames and texts outside components."""

    def test_single_child_frame_unwrapped(self, text_in_frame):
        assert generate_code(text_in_frame) == '<p id="text-2" class="t">Hello</p>'

    def test_react_class_name(self, text_in_frame):
        assert generate_code(text_in_frame, FrameworkTarget.REACT) == (
            '<p id="text-2" className="t">Hello</p>'
        )

    def test_target_as_string(self, text_in_frame):
        assert generate_code(text_in_frame, 'react') == '<p id="text-2" className="t">Hello</p>'

    def test_children_joined_by_newline(self):
        node = DesignNode.model_validate({
            'type': 'FRAME', 'name': 'Row', 'id': '1',
            'children': [
                {'type': 'TEXT', 'name': 'a', 'id': '2', 'text': 'A'},
                {'type': 'TEXT', 'name': 'b', 'id': '3', 'text': 'B'},
            ],
        })
        assert generate_code(node) == (
            '<div id="frame-1" class="row">'
            '<p id="text-2" class="a">A</p>\n<p id="text-3" class="b">B</p>'
            '</div>'
        )

    def test_empty_frame_omitted(self):
        node = DesignNode(type='FRAME', name='Spacer', id='1')
        assert generate_code(node) == ''
        assert generate_code(node, FrameworkTarget.REACT) == ''

    def test_empty_children_skipped(self):
        node = DesignNode.model_validate({
            'type': 'FRAME', 'name': 'Row', 'id': '1',
            'children': [
                {'type': 'FRAME', 'name': 'Spacer', 'id': '2'},
                {'type': 'TEXT', 'name': 'a', 'id': '3', 'text': 'A'},
            ],
        })
        assert generate_code(node) == '<div id="frame-1" class="row"><p id="text-3" class="a">A</p></div>'


class TestComponents:
    """Verify instances render as code components."""

    def test_button_html(self, button_instance):
        assert generate_code(button_instance) == (
            '<db-button id="instance-10-1" class="button" variant="primary">Click</db-button>'
        )

    def test_button_react(self, button_instance):
        assert generate_code(button_instance, FrameworkTarget.REACT) == (
            '<DBButton id="instance-10-1" className="button" variant="primary">Click</DBButton>'
        )

    def test_configured_prefix(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Link', 'id': '3',
            'variantProperties': {'component': 'link'},
            'children': [{'type': 'TEXT', 'name': 'Text', 'id': '4', 'text': 'More'}],
        })
        config = GeneratorConfig(prefix='db')
        assert generate_code(node, FrameworkTarget.HTML, config) == (
            '<db-link id="instance-3" class="link">More</db-link>'
        )

    def test_icons_become_props(self, icon_button):
        assert generate_code(icon_button) == (
            '<button id="instance-20-1" class="button" icon-after="arrow" icon="star">Go</button>'
        )
        assert generate_code(icon_button, FrameworkTarget.REACT) == (
            '<Button id="instance-20-1" className="button" iconAfter="arrow" icon="star">Go</Button>'
        )

    def test_input_react_self_closing(self, input_instance):
        assert generate_code(input_instance, FrameworkTarget.REACT) == (
            '<Input id="instance-30-1" className="input" validation="invalid" required '
            'placeholder="Enter mail" label="E-Mail" invalidMessage="Wrong format"/>'
        )

    def test_input_html_without_content_omitted(self, input_instance):
        assert generate_code(input_instance) == ''

    def test_notification_headline_and_visual(self, notification_instance):
        assert generate_code(notification_instance) == (
            '<notification id="instance-40-1" class="notification" icon="information_circle" '
            'headline-plain="Heads up">Body</notification>'
        )

    def test_input_tree_not_modified(self, input_instance):
        before = input_instance.model_copy(deep=True)
        generate_code(input_instance, FrameworkTarget.REACT)
        assert input_instance == before

    def test_react_empty_component(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Divider', 'id': '9',
            'variantProperties': {'component': 'divider'},
        })
        assert generate_code(node, FrameworkTarget.REACT) == '<Divider id="instance-9" className="divider"/>'
        assert generate_code(node, FrameworkTarget.HTML) == ''

    def test_unmapped_instance(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Thing', 'id': '7',
            'children': [{'type': 'TEXT', 'name': 'Caption', 'id': '8', 'text': 'x'}],
        })
        assert generate_code(node) == (
            '<div id="instance-7" class="thing" data-component="custom">'
            '<p id="text-8" class="caption">x</p></div>'
        )

    def test_fragment_inside_component(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Button', 'id': '1',
            'variantProperties': {'component': 'button'},
            'children': [
                {'type': 'FRAME', 'name': 'Wrapper', 'id': '2',
                 'children': [{'type': 'TEXT', 'name': 'Text', 'id': '3', 'text': 'Go'}]},
            ],
        })
        assert generate_code(node) == '<button id="instance-1" class="button">Go</button>'

    def test_nested_card_passes_content_through(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Button', 'id': '1',
            'variantProperties': {'component': 'button'},
            'children': [
                {'type': 'INSTANCE', 'name': 'Card', 'id': '2',
                 'variantProperties': {'component': 'card'},
                 'children': [{'type': 'TEXT', 'name': 'Text', 'id': '3', 'text': 'Inside'}]},
            ],
        })
        assert generate_code(node) == '<button id="instance-1" class="button">Inside</button>'

    def test_props_children_template(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Item', 'id': '11',
            'variantProperties': {'component': 'custom-select-list-item', 'Children': 'checkbox-radio'},
            'children': [{'type': 'TEXT', 'name': 'Text', 'id': '12', 'text': 'Option'}],
        })
        assert generate_code(node) == '\n'.join([
            '<custom-select-list-item id="instance-11" class="item">'
            '<label>Option<input type="checkbox"/></label>',
            '<!--',
            'You could use those elements as well',
            '<label>Option<input type="radio"/></label>',
            '--></custom-select-list-item>',
        ])

    def test_consumed_child_leaves_siblings_in_order(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Button', 'id': '1',
            'variantProperties': {'component': 'button'},
            'children': [
                {'type': 'TEXT', 'name': 'First', 'id': '2', 'text': 'A'},
                {'type': 'TEXT', 'name': 'Marker', 'id': '3', 'text': '*'},
                {'type': 'TEXT', 'name': 'Last', 'id': '4', 'text': 'C'},
            ],
        })
        assert generate_code(node) == '<button id="instance-1" class="button" required>A\nC</button>'

    def test_text_component_property_not_emitted(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Input', 'id': '1',
            'variantProperties': {'component': 'input'},
            'componentProperties': {'Label': 'First Name'},
            'children': [{'type': 'TEXT', 'name': 'Text', 'id': '2', 'text': 'x'}],
        })
        assert generate_code(node) == '<input id="instance-1" class="input">x</input>'

    def test_free_text_attribute_escaped(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Input', 'id': '1',
            'variantProperties': {'component': 'input', 'Placeholder': 'Say "hi" & <wave>'},
            'children': [{'type': 'TEXT', 'name': 'Text', 'id': '2', 'text': 'x'}],
        })
        assert generate_code(node) == (
            '<input id="instance-1" class="input" '
            'placeholder="Say &quot;hi&quot; &amp; &lt;wave&gt;">x</input>'
        )

    def test_false_props_dropped(self):
        node = DesignNode.model_validate({
            'type': 'INSTANCE', 'name': 'Tag', 'id': '5',
            'variantProperties': {'component': 'tag', 'Disabled': 'False', 'Overflow': 'True'},
            'children': [{'type': 'TEXT', 'name': 'Text', 'id': '6', 'text': 'New'}],
        })
        assert generate_code(node) == '<tag id="instance-5" class="tag" overflow>New</tag>'
