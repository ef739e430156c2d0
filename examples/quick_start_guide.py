#!/usr/bin/env python3
"""
Quick Start Guide for the Selective Markup Filter.

Walks through the three API levels: whole-document extraction, pulling
matches from a cursor, and a configured builder.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from selective_markup_filter import (
    ExtractionConfig,
    FilterConfig,
    FilterError,
    HTMLTokenizer,
    SelectiveTreeBuilder,
    StreamExhausted,
    extract_html,
    next_match,
    render,
)

SAMPLE = """<html>
  <p>
    <a name="foo"/>
    <small><font face="Arial">Foo <sup><u><b>Bar</b></u></sup></font></small>
    <a href="/path/to/somewhere"><i>Baz</i></a>
  </p>
  <p><span>Ding</span></p>
</html>"""


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - Selective Markup Filter")
    print("=" * 45)

    # Step 1: Whole-document extraction
    print("\n📄 Step 1: Extract every match")
    print("-" * 30)

    for element in extract_html(SAMPLE, {"p", "a", "sup"}):
        print(f"  {element}")

    # Step 2: Pull matches one at a time
    print("\n🧭 Step 2: Cursor-driven extraction")
    print("-" * 30)

    cursor = HTMLTokenizer(SAMPLE)
    while True:
        try:
            element = next_match(cursor, "a")
        except StreamExhausted:
            break
        print(f"  <a> at line {element.position.line}: {element.attributes}")

    # Step 3: Configured builder
    print("\n⚙️  Step 3: Strict scoping")
    print("-" * 30)

    builder = SelectiveTreeBuilder(ExtractionConfig.strict_scope().filter)
    element = builder.next_match(HTMLTokenizer(SAMPLE), {"p", "a", "sup"})
    print(f"  {render(element, self_closing_marker=True)}")

    # Step 4: Errors
    print("\n⚠️  Step 4: Unbalanced markup")
    print("-" * 30)

    builder = SelectiveTreeBuilder(FilterConfig(max_depth=16))
    try:
        builder.next_match(HTMLTokenizer("<p><span>Foo</i></p>"), "p")
    except FilterError as e:
        print(f"  {type(e).__name__}: {e}")


if __name__ == "__main__":
    quick_start_example()
