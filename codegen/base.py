"""
Base module - shared node model, configuration and naming helpers.

Every generator in this package consumes the same ``DesignNode`` tree and
derives ids, class names and tag names through the helpers defined here.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_ICON = "information_circle"
DEFAULT_IMAGE = (
    "https://raw.githubusercontent.com/db-ui/mono/refs/heads/main/"
    "packages/foundations/assets/images/db_logo.svg"
)

# Keys whose values carry free-form user text and are never slugified
VALUE_EXCEPTIONS = (
    "placeholder",
    "label",
    "value",
    "message",
    "valid-message",
    "invalid-message",
    "placement",
    "headline-plain",
)

# Boolean component properties that always win over variant properties
COMPONENT_PROPERTY_KEYS = ("show-icon", "closeable")


class NodeType(str, Enum):
    """Node types the generator knows about."""
    FRAME = "FRAME"
    GROUP = "GROUP"
    TEXT = "TEXT"
    INSTANCE = "INSTANCE"


class FrameworkTarget(str, Enum):
    """Markup flavor."""
    HTML = "html"
    REACT = "react"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GeneratorConfig:
    prefix: Optional[str] = None
    default_icon: str = DEFAULT_ICON
    default_image: str = DEFAULT_IMAGE
    value_exceptions: Tuple[str, ...] = VALUE_EXCEPTIONS
    component_property_keys: Tuple[str, ...] = COMPONENT_PROPERTY_KEYS
    design_variable_marker: str = "🎨"
    or_property_marker: str = "↳ OR"
    custom_component_attribute: Tuple[str, str] = ("data-component", "custom")


DEFAULT_CONFIG = GeneratorConfig()


# ---------------------------------------------------------------------------
# Node model
# ---------------------------------------------------------------------------

class FontName(BaseModel):
    family: str
    style: str = ""


class VariableMode(BaseModel):
    """Variable mode explicitly set on a node (e.g. a dark theme frame)."""
    model_config = ConfigDict(populate_by_name=True)

    collection_id: Optional[str] = Field(default=None, alias="collectionId")
    collection_name: Optional[str] = Field(default=None, alias="collectionName")
    mode_id: Optional[str] = Field(default=None, alias="modeId")
    found_mode_name: Optional[str] = Field(default=None, alias="foundModeName")


class DesignNode(BaseModel):
    """A design tree node as exported by the plugin (camelCase on the wire)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = Field(..., description="FRAME, GROUP, TEXT, INSTANCE or any other host type")
    name: str = Field(default="", description="Layer name")
    id: str = Field(..., description="Node id from the source document")
    text: Optional[str] = Field(default=None, description="Characters of a TEXT node")
    font_name: Optional[FontName] = Field(default=None, alias="fontName")
    modes: Optional[List[VariableMode]] = None
    css: Optional[Dict[str, str]] = Field(default=None, description="Computed CSS of the node")
    variant_properties: Optional[Dict[str, str]] = Field(default=None, alias="variantProperties")
    component_properties: Optional[Dict[str, Union[bool, str]]] = Field(
        default=None, alias="componentProperties"
    )
    component_name: Optional[str] = Field(default=None, alias="componentName")
    main_component_name: Optional[str] = Field(default=None, alias="mainComponentName")
    children: Optional[List["DesignNode"]] = None

    def to_json_dict(self) -> Dict:
        """Dump in the plugin's camelCase shape, without empty fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


DesignNode.model_rebuild()


# ---------------------------------------------------------------------------
# Derived value types
# ---------------------------------------------------------------------------

@dataclass
class ResolvedTag:
    """Tag, props and optional children transform for one node."""
    tag: str = ""
    props: Dict[str, str] = field(default_factory=dict)
    children: Optional[Callable[[str], str]] = None


@dataclass
class CssNode:
    id: str
    class_name: str
    css: Dict[str, str]


@dataclass
class CssRule:
    """One rule of the generated stylesheet (``#id`` or ``.class``)."""
    selector: str
    properties: Dict[str, str]

    def render(self) -> str:
        body = '\n'.join(f"  {key}: {value};" for key, value in self.properties.items())
        return f"{self.selector}{{\n{body}\n}}"


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------

_DECAMELIZE_PATTERNS = (
    (re.compile(r'([A-Z]{2,})(\d+)'), r'\1 \2'),
    (re.compile(r'([a-z\d]+)([A-Z]{2,})'), r'\1 \2'),
    (re.compile(r'([a-z\d])([A-Z])'), r'\1 \2'),
    (re.compile(r'([A-Z]+)([A-Z][a-rt-z\d]+)'), r'\1 \2'),
)
_NON_ALNUM = re.compile(r'[^a-z0-9]+')

# Applied before accents are stripped
_TRANSLITERATIONS = {
    'ä': 'ae', 'ö': 'oe', 'ü': 'ue',
    'Ä': 'Ae', 'Ö': 'Oe', 'Ü': 'Ue',
    'ß': 'ss', 'ẞ': 'SS',
    '&': ' and ',
}
_TRANSLITERATION_TABLE = str.maketrans(_TRANSLITERATIONS)


def slugify(text: str) -> str:
    """Lower-case, dash-separated slug; umlauts are transliterated, camelCase words split."""
    text = unicodedata.normalize('NFC', str(text)).translate(_TRANSLITERATION_TABLE)
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    for pattern, replacement in _DECAMELIZE_PATTERNS:
        text = pattern.sub(replacement, text)
    return _NON_ALNUM.sub('-', text.lower()).strip('-')


def _clear_and_upper(match: "re.Match[str]") -> str:
    return match.group(0).replace('-', '', 1).upper()


def to_pascal_case(text: str) -> str:
    return re.sub(r'(^\w|-\w)', _clear_and_upper, text)


def to_camel_case(text: str) -> str:
    return re.sub(r'-\w', _clear_and_upper, text)


def get_id(node: DesignNode) -> str:
    """DOM-safe id, unique per node."""
    return slugify(f"{node.type}-{node.id}")


def get_class_name(node: DesignNode) -> str:
    """Class name derived from the layer name; shared by equally named nodes."""
    return slugify(node.name)


def is_component(node: Optional[DesignNode]) -> bool:
    return node is not None and node.type == NodeType.INSTANCE.value
