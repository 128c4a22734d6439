"""Tests for RST page parser."""

from pathlib import Path

import pytest

from docs_browser.models import BlockKind, ContentBlock
from docs_browser.parser import RstPageParser


@pytest.fixture
def parser() -> RstPageParser:
    """Create an RstPageParser instance.

    Returns:
        RstPageParser instance.
    """
    return RstPageParser()


@pytest.fixture
def temp_docs_dir(tmp_path: Path) -> Path:
    """Create a temporary docs directory.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Path to temporary docs directory.
    """
    docs_dir = tmp_path / "architecture"
    docs_dir.mkdir()
    return docs_dir


def test_parse_basic_rst_file(parser: RstPageParser, temp_docs_dir: Path) -> None:
    """Test parsing a basic RST file."""
    rst_content = """
Getting Started
===============

WebStudio is a visual builder.

Installation
------------

Run this::

    pnpm install

* first step
* second step
"""
    file_path = temp_docs_dir / "getting-started.rst"
    file_path.write_text(rst_content)

    page = parser.parse_file(file_path)

    assert page is not None
    assert page.id == "getting-started"
    assert page.title == "Getting Started"
    assert page.blocks == (
        ContentBlock.text("WebStudio is a visual builder."),
        ContentBlock.header("Installation"),
        ContentBlock.text("Run this:"),
        ContentBlock.code("pnpm install"),
        ContentBlock.list_items(["first step", "second step"]),
    )


def test_code_block_language(parser: RstPageParser) -> None:
    """Test that code directives keep their language."""
    rst_content = """
Example
=======

.. code-block:: python

    def handler():
        return 1

.. code:: yaml

    policies: []
"""
    page = parser.parse_string(rst_content, "example")

    code_blocks = [block for block in page.blocks if block.kind is BlockKind.CODE]
    assert code_blocks == [
        ContentBlock.code("def handler():\n    return 1", "python"),
        ContentBlock.code("policies: []", "yaml"),
    ]


def test_mermaid_directive(parser: RstPageParser) -> None:
    """Test that mermaid directives become diagram blocks with raw source."""
    rst_content = """
Flow
====

.. mermaid::

   graph TD
     Editor --> Canvas
"""
    page = parser.parse_string(rst_content, "flow")

    assert page.blocks == (ContentBlock.mermaid("graph TD\n  Editor --> Canvas"),)


def test_enumerated_list(parser: RstPageParser) -> None:
    """Test that enumerated lists become list blocks."""
    rst_content = """
Steps
=====

1. Clone the repository.
2. Install dependencies.
"""
    page = parser.parse_string(rst_content, "steps")

    assert page.blocks == (ContentBlock.list_items(["Clone the repository.", "Install dependencies."]),)


def test_later_top_level_titles_become_headers(parser: RstPageParser) -> None:
    """Test that only the leading title is used as the page title."""
    rst_content = """
First
=====

One.

Second
======

Two.
"""
    page = parser.parse_string(rst_content, "titles")

    assert page.title == "First"
    assert page.blocks == (
        ContentBlock.text("One."),
        ContentBlock.header("Second"),
        ContentBlock.text("Two."),
    )


def test_paragraph_lines_joined(parser: RstPageParser) -> None:
    """Test that wrapped paragraph lines collapse into one line."""
    rst_content = """
Title
=====

This paragraph
spans several
lines.
"""
    page = parser.parse_string(rst_content, "wrapped")

    assert page.blocks == (ContentBlock.text("This paragraph spans several lines."),)


def test_fallback_title_from_filename(parser: RstPageParser, temp_docs_dir: Path) -> None:
    """Test fallback to filename when no title is found."""
    rst_content = """
Just some content without a title.
"""
    file_path = temp_docs_dir / "my-test_file.rst"
    file_path.write_text(rst_content)

    page = parser.parse_file(file_path)

    assert page is not None
    assert page.title == "My Test File"
    assert page.blocks == (ContentBlock.text("Just some content without a title."),)


def test_skip_comments(parser: RstPageParser) -> None:
    """Test that comments are excluded from content."""
    rst_content = """
Title
=====

.. this is a comment
   spanning two lines

Visible text.
"""
    page = parser.parse_string(rst_content, "comments")

    assert page.blocks == (ContentBlock.text("Visible text."),)


def test_admonition_content_kept(parser: RstPageParser) -> None:
    """Test that admonition bodies are kept without directive markup."""
    rst_content = """
Title
=====

.. note::
   This is a note.

Normal content here.
"""
    page = parser.parse_string(rst_content, "notes")

    texts = [block.value for block in page.blocks]
    assert "This is a note." in texts
    assert "Normal content here." in texts
    assert not any(".. note::" in str(text) for text in texts)


def test_clean_rst_roles(parser: RstPageParser) -> None:
    """Test that unresolved RST roles are reduced to their text."""
    rst_content = """
Title
=====

See :doc:`other-document` for more information.
"""
    page = parser.parse_string(rst_content, "roles")

    assert page.blocks == (ContentBlock.text("See other-document for more information."),)


def test_parse_rst_with_tables(parser: RstPageParser) -> None:
    """Test parsing RST with tables."""
    rst_content = """
Resources
=========

+----------+-------------+
| Resource | Description |
+==========+=============+
| s3       | S3 buckets  |
+----------+-------------+

Content after table.
"""
    page = parser.parse_string(rst_content, "tables")

    assert page.title == "Resources"
    assert page.blocks[-1] == ContentBlock.text("Content after table.")
    assert ContentBlock.text("S3 buckets") in page.blocks


def test_parse_rest_extension(parser: RstPageParser, temp_docs_dir: Path) -> None:
    """Test parsing .rest files (alternative RST extension)."""
    rst_content = """
Alternative Extension
=====================

This file uses .rest extension.
"""
    file_path = temp_docs_dir / "alternative.rest"
    file_path.write_text(rst_content)

    page = parser.parse_file(file_path)

    assert page is not None
    assert page.id == "alternative"
    assert page.title == "Alternative Extension"


def test_parse_invalid_rst(parser: RstPageParser, temp_docs_dir: Path) -> None:
    """Test that undecodable files return None gracefully."""
    file_path = temp_docs_dir / "invalid.rst"
    file_path.write_bytes(b"\xff\xfe")

    assert parser.parse_file(file_path) is None


def test_parse_missing_file(parser: RstPageParser, temp_docs_dir: Path) -> None:
    """Test that a missing file returns None."""
    assert parser.parse_file(temp_docs_dir / "missing.rst") is None


def test_parse_empty_file(parser: RstPageParser, temp_docs_dir: Path) -> None:
    """Test parsing an empty RST file."""
    file_path = temp_docs_dir / "empty.rst"
    file_path.write_text("")

    page = parser.parse_file(file_path)

    assert page is not None
    assert page.title == "Empty"  # Fallback to filename
    assert page.blocks == ()
