"""Design tree to HTML/React markup and CSS generators."""

from codegen.base import (
    DesignNode,
    FrameworkTarget,
    GeneratorConfig,
    get_class_name,
    get_id,
    slugify,
)
from codegen.css_generator import generate_styles
from codegen.figma_nodes import design_node_from_figma
from codegen.markup_generator import generate_code
from codegen.properties import normalize_properties, resolve_props_children
from codegen.resolvers import resolve_tree
from codegen.tags import resolve_tag

__all__ = [
    "DesignNode",
    "FrameworkTarget",
    "GeneratorConfig",
    "design_node_from_figma",
    "generate_code",
    "generate_styles",
    "get_class_name",
    "get_id",
    "normalize_properties",
    "resolve_props_children",
    "resolve_tag",
    "resolve_tree",
    "slugify",
]
