#!/usr/bin/env python3
"""
Design Codegen MCP Server - Model Context Protocol server for design-to-code.

This server turns design trees into component markup and stylesheets:
- HTML (web components) or React (JSX) markup from a design node tree
- Deduplicated CSS (shared class rules + per-id overrides)
- Design tree extraction from the Figma REST API
- One-step Figma node to code generation
"""

import json
import logging
import os
import re
from enum import Enum
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field, field_validator, ConfigDict
from mcp.server.fastmcp import FastMCP

from codegen.base import DesignNode, FrameworkTarget, GeneratorConfig
from codegen.css_generator import generate_styles
from codegen.figma_nodes import design_node_from_figma
from codegen.markup_generator import generate_code

# ============================================================================
# Constants
# ============================================================================

FIGMA_API_BASE = "https://api.figma.com/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_DEPTH = 5

logger = logging.getLogger("codegen_mcp")

# ============================================================================
# Initialize MCP Server
# ============================================================================

mcp = FastMCP("codegen_mcp")

# ============================================================================
# Enums and Types
# ============================================================================

class ResponseFormat(str, Enum):
    """Output format for tool responses."""
    MARKDOWN = "markdown"
    JSON = "json"


# ============================================================================
# Pydantic Input Models
# ============================================================================

def _extract_file_key(v: str) -> str:
    if 'figma.com' in v:
        match = re.search(r'figma\.com/(?:design|file)/([a-zA-Z0-9]+)', v)
        if match:
            return match.group(1)
        raise ValueError("Could not extract file key from Figma URL")
    return v


class DesignCodeGenInput(BaseModel):
    """Input model for code generation from a design tree."""
    model_config = ConfigDict(str_strip_whitespace=True)

    node: DesignNode = Field(..., description="Design node tree as exported by the plugin")
    target: FrameworkTarget = Field(
        default=FrameworkTarget.HTML,
        description="Markup flavor: 'html' (web components) or 'react' (JSX)"
    )
    with_css: bool = Field(default=True, description="Also generate the stylesheet")
    prefix: Optional[str] = Field(
        default=None,
        description="Component prefix used when a component carries none (e.g. 'db')"
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' or 'json'"
    )


class DesignStylesInput(BaseModel):
    """Input model for stylesheet generation."""
    model_config = ConfigDict(str_strip_whitespace=True)

    node: DesignNode = Field(..., description="Design node tree with per-node css")


class FigmaDesignTreeInput(BaseModel):
    """Input model for design tree extraction."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    file_key: str = Field(
        ...,
        description="Figma file key (from URL: figma.com/design/FILE_KEY/...)",
        min_length=10,
        max_length=50
    )
    node_id: str = Field(..., description="Node ID (e.g., '1:2' or '1-2')", min_length=1)
    with_css: bool = Field(default=True, description="Attach computed CSS to every node")
    with_modes: bool = Field(
        default=False,
        description="Attach explicitly set variable modes (e.g. light/dark) to every node"
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        description="Levels of children to extract (-1 for all)",
        ge=-1,
        le=50
    )

    @field_validator('file_key')
    @classmethod
    def validate_file_key(cls, v: str) -> str:
        return _extract_file_key(v)

    @field_validator('node_id')
    @classmethod
    def normalize_node_id(cls, v: str) -> str:
        # Convert 1-2 format to 1:2
        return v.replace('-', ':')


class FigmaCodeGenInput(FigmaDesignTreeInput):
    """Input model for code generation from a Figma node."""
    target: FrameworkTarget = Field(
        default=FrameworkTarget.HTML,
        description="Markup flavor: 'html' (web components) or 'react' (JSX)"
    )
    prefix: Optional[str] = Field(
        default=None,
        description="Component prefix used when a component carries none (e.g. 'db')"
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' or 'json'"
    )


# ============================================================================
# Helper Functions
# ============================================================================

def _get_figma_token() -> str:
    """Get Figma API token from environment."""
    token = os.environ.get("FIGMA_ACCESS_TOKEN") or os.environ.get("FIGMA_TOKEN")
    if not token:
        raise ValueError(
            "Figma API token not found. Set FIGMA_ACCESS_TOKEN or FIGMA_TOKEN environment variable. "
            "Get your token from: https://www.figma.com/developers/api#access-tokens"
        )
    return token


async def _make_figma_request(
    endpoint: str,
    method: str = "GET",
    params: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Make authenticated request to Figma API."""
    token = _get_figma_token()

    async with httpx.AsyncClient() as client:
        response = await client.request(
            method=method,
            url=f"{FIGMA_API_BASE}/{endpoint}",
            headers={"X-Figma-Token": token},
            params=params,
            timeout=DEFAULT_TIMEOUT
        )
        response.raise_for_status()
        return response.json()


def _handle_api_error(e: Exception) -> str:
    """Format API errors for user-friendly messages."""
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        if status == 401:
            return "Error: Invalid Figma API token. Check your FIGMA_ACCESS_TOKEN environment variable."
        elif status == 403:
            return "Error: Access denied. You don't have permission to view this file."
        elif status == 404:
            return "Error: File or node not found. Check the file key and node ID."
        elif status == 429:
            return "Error: Rate limit exceeded. Please wait before making more requests."
        return f"Error: Figma API returned status {status}"
    elif isinstance(e, httpx.TimeoutException):
        return "Error: Request timed out. The file might be too large."
    elif isinstance(e, ValueError):
        return f"Error: {str(e)}"
    return f"Error: {type(e).__name__}: {str(e)}"


async def _fetch_variable_collections(file_key: str) -> Dict[str, Any]:
    """Load the file's variable collections; empty when the plan has no variables API."""
    try:
        data = await _make_figma_request(f"files/{file_key}/variables/local")
    except httpx.HTTPStatusError as e:
        if e.response.status_code != 403:
            raise
        logger.warning("Variables API not available for %s, modes stay unnamed", file_key)
        return {}
    return (data.get('meta') or {}).get('variableCollections') or {}


async def _fetch_design_node(
    file_key: str,
    node_id: str,
    with_css: bool,
    max_depth: int,
    with_modes: bool = False,
) -> DesignNode:
    """Load a node from Figma and convert it into a design tree."""
    data = await _make_figma_request(f"files/{file_key}/nodes", params={"ids": node_id})
    entry = (data.get('nodes') or {}).get(node_id)
    if not entry or not entry.get('document'):
        raise ValueError(f"Node '{node_id}' not found.")

    variable_collections = await _fetch_variable_collections(file_key) if with_modes else None

    logger.info("Converting Figma node %s from %s (depth %s)", node_id, file_key, max_depth)
    return design_node_from_figma(
        entry['document'],
        components=entry.get('components'),
        component_sets=entry.get('componentSets'),
        with_css=with_css,
        depth=max_depth,
        with_modes=with_modes,
        variable_collections=variable_collections,
    )


def _render_output(
    node: DesignNode,
    target: FrameworkTarget,
    with_css: bool,
    prefix: Optional[str],
    response_format: ResponseFormat,
) -> str:
    """Generate markup (and css) and format it for the client."""
    config = GeneratorConfig(prefix=prefix or None)
    code = generate_code(node, target, config)
    css = generate_styles(node) if with_css else None

    if response_format == ResponseFormat.JSON:
        result = {"target": target.value, "code": code}
        if css is not None:
            result["css"] = css
        return json.dumps(result, indent=2, ensure_ascii=False)

    lines = [
        f"# Generated Code: {node.name or node.id}",
        f"**Target:** {target.value}",
        f"**Source Node:** `{node.id}`",
        "",
        "```" + ("tsx" if target == FrameworkTarget.REACT else "html"),
        code,
        "```",
    ]
    if css is not None:
        lines.extend(["", "## Styles", "", "```css", css, "```"])
    return "\n".join(lines)


# ============================================================================
# MCP Tools
# ============================================================================

@mcp.tool(
    name="design_generate_code",
    annotations={
        "title": "Generate Code from Design Tree",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False
    }
)
async def design_generate_code(params: DesignCodeGenInput) -> str:
    """
    Generate component markup (and CSS) from a design node tree.

    Component instances are mapped to code components through their
    ``component`` variant property; icons, labels, placeholders, required
    markers, info texts and headlines drawn as child layers become props.

    Args:
        params: DesignCodeGenInput containing:
            - node (DesignNode): design tree
            - target: 'html' or 'react'
            - with_css (bool): also generate the stylesheet
            - prefix (Optional[str]): default component prefix
            - response_format: 'markdown' or 'json'

    Returns:
        str: Generated code in the requested format
    """
    try:
        return _render_output(
            params.node, params.target, params.with_css, params.prefix, params.response_format
        )
    except Exception as e:
        logger.exception("Code generation failed")
        return _handle_api_error(e)


@mcp.tool(
    name="design_generate_styles",
    annotations={
        "title": "Generate CSS from Design Tree",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False
    }
)
async def design_generate_styles(params: DesignStylesInput) -> str:
    """
    Generate a stylesheet from the per-node css of a design tree.

    Properties present on every node sharing a class name are hoisted into
    the class rule; remaining properties become id rules.

    Args:
        params: DesignStylesInput containing:
            - node (DesignNode): design tree with css maps

    Returns:
        str: CSS stylesheet
    """
    try:
        return generate_styles(params.node)
    except Exception as e:
        logger.exception("Style generation failed")
        return _handle_api_error(e)


@mcp.tool(
    name="figma_get_design_tree",
    annotations={
        "title": "Get Design Tree from Figma",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def figma_get_design_tree(params: FigmaDesignTreeInput) -> str:
    """
    Extract a design tree from a Figma node.

    The tree contains node types, names, ids, texts and font names,
    variant and component properties, component names and optionally
    computed css and explicit variable modes. It can be passed to
    design_generate_code as is.

    Args:
        params: FigmaDesignTreeInput containing:
            - file_key (str): Figma file key or full URL
            - node_id (str): Node ID to extract
            - with_css (bool): attach computed css
            - with_modes (bool): attach explicit variable modes
            - max_depth (int): levels of children (-1 for all)

    Returns:
        str: JSON design tree
    """
    try:
        node = await _fetch_design_node(
            params.file_key, params.node_id, params.with_css, params.max_depth, params.with_modes
        )
        return json.dumps(node.to_json_dict(), indent=2, ensure_ascii=False)
    except Exception as e:
        return _handle_api_error(e)


@mcp.tool(
    name="figma_generate_code",
    annotations={
        "title": "Generate Code from Figma",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def figma_generate_code(params: FigmaCodeGenInput) -> str:
    """
    Generate component markup (and CSS) directly from a Figma node.

    Args:
        params: FigmaCodeGenInput containing:
            - file_key (str): Figma file key or full URL
            - node_id (str): Node ID to convert
            - target: 'html' or 'react'
            - with_css (bool): also generate the stylesheet
            - with_modes (bool): attach explicit variable modes
            - max_depth (int): levels of children (-1 for all)
            - prefix (Optional[str]): default component prefix
            - response_format: 'markdown' or 'json'

    Returns:
        str: Generated code in the requested format
    """
    try:
        node = await _fetch_design_node(
            params.file_key, params.node_id, params.with_css, params.max_depth, params.with_modes
        )
        return _render_output(
            node, params.target, params.with_css, params.prefix, params.response_format
        )
    except Exception as e:
        return _handle_api_error(e)


# ============================================================================
# Entry Point
# ============================================================================

def main() -> None:
    # stdout carries the MCP stdio transport
    logging.basicConfig(
        level=os.environ.get("CODEGEN_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    mcp.run()


if __name__ == "__main__":
    main()
