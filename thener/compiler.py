"""Markdown to HTML with Mermaid code blocks replaced by rendered SVG.

The composed document is parsed into a ``SyntaxTreeNode`` tree, the tree
is walked to swap every ```` ```mermaid ```` block for a raw HTML block
holding the rendered diagram, and the result is rendered back to HTML.
Raw HTML in the source (annotation spans, import markers) passes through
untouched.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

from .diagrams import DiagramRenderer, render_mermaid_svg

logger = logging.getLogger(__name__)

DIAGRAM_LANGUAGE = "mermaid"
CODE_BLOCK_TYPES = {"fence", "code_block"}


def create_parser() -> MarkdownIt:
    """CommonMark parser with raw HTML enabled, plus tables and strikethrough."""
    return MarkdownIt("commonmark", {"html": True}).enable("table").enable("strikethrough")


def wrap_diagram(svg: str) -> str:
    return f"<figure class='mermaid-graph'>{svg}</figure>"


def is_diagram_block(node: SyntaxTreeNode) -> bool:
    return node.type in CODE_BLOCK_TYPES and node.info.startswith(DIAGRAM_LANGUAGE)


def parse_tree(markdown: str, md: Optional[MarkdownIt] = None) -> SyntaxTreeNode:
    md = md or create_parser()
    return SyntaxTreeNode(md.parse(markdown))


def _raw_html_token(block: Token, html: str) -> Token:
    return Token(
        "html_block",
        "",
        0,
        map=block.map,
        level=block.level,
        content=html,
        block=True,
    )


def substitute_diagrams(tree: SyntaxTreeNode, renderer: DiagramRenderer) -> SyntaxTreeNode:
    """Return a copy of *tree* with every diagram block rendered.

    Nodes are visited parent first.  Each Mermaid code block is handed to
    *renderer*, and its output, wrapped in a ``mermaid-graph`` figure,
    takes the block's place as a raw HTML node.  All other nodes keep
    their position and content.  *tree* itself is not modified.

    Raises:
        RenderError: from *renderer*; the walk stops at the first failure.
    """
    replacements: Dict[int, Token] = {}
    for node in tree.walk():
        if not is_diagram_block(node):
            continue
        logger.info("Generating graph")
        svg = renderer(node.content)
        replacements[id(node.token)] = _raw_html_token(node.token, wrap_diagram(svg))
        logger.info("Graph generated")

    logger.debug("Rendered %d diagram(s)", len(replacements))
    tokens = [replacements.get(id(token), token) for token in tree.to_tokens()]
    return SyntaxTreeNode(tokens)


def render_tree(tree: SyntaxTreeNode, md: Optional[MarkdownIt] = None) -> str:
    md = md or create_parser()
    return md.renderer.render(tree.to_tokens(), md.options, {})


def markdown_to_html(
    markdown: str,
    renderer: Optional[DiagramRenderer] = None,
    render_diagrams: bool = True,
) -> str:
    """Compile a composed document to an HTML fragment.

    Args:
        markdown: The composed document.
        renderer: Diagram renderer (default: Mermaid CLI).
        render_diagrams: When False, Mermaid blocks stay as code listings.

    Returns:
        The HTML fragment; nothing is returned if any diagram fails.
    """
    md = create_parser()
    tree = parse_tree(markdown, md)
    if render_diagrams:
        tree = substitute_diagrams(tree, renderer or render_mermaid_svg)
    return render_tree(tree, md)
