"""Shared HTML documents for the test suite."""

from __future__ import annotations

import json

import pytest

ARTICLE_HTML = """
<html>
<head>
  <meta property="og:type" content="article">
  <meta property="og:title" content="How Cities Adapt To Rising Heat | Daily Planet">
</head>
<body>
  <header><p>Site header paragraph that is long enough to count.</p></header>
  <nav><ul><li>Home page link</li><li>World news link</li></ul></nav>
  <article>
    <h2>How cities adapt to rising heat</h2>
    <p>Urban planners across the world are redesigning streets, parks and rooftops to cope with longer summers.</p>
    <p>Reflective roofing, shaded walkways and expanded tree canopies are among the cheapest interventions.</p>
    <blockquote>Heat is the deadliest weather hazard that most residents never see coming.</blockquote>
    <p>Read more: our full coverage of climate adaptation in cities around the world.</p>
    <ul><li>Cool roofs program</li><li>Tree planting</li></ul>
  </article>
  <footer><p>Copyright 2024 Daily Planet. All rights reserved everywhere.</p></footer>
</body>
</html>
"""

SHORT_HTML = """
<html><body>
  <div>
    <p>This first paragraph is deliberately short and adds up to ninety characters or so total.</p>
    <p>The second paragraph is also short, so the page never reaches the body threshold.</p>
  </div>
</body></html>
"""

LINKED_DATA_BODY = (
    "Coastal towns are rebuilding their sea walls with porous concrete that absorbs wave energy.\n\n"
    "Engineers say the new design reduces erosion at the base of the wall by almost half.\n\n"
    "Advertisement\n\n"
    "Residents have welcomed the project, although construction closed the harbour for a month."
)


def linked_data_html(records: object, *, extra_scripts: str = "") -> str:
    return (
        "<html><head>"
        f"{extra_scripts}"
        f'<script type="application/ld+json">{json.dumps(records)}</script>'
        "</head><body><p>Unrelated body text that should never be used here.</p></body></html>"
    )


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML


@pytest.fixture
def short_html() -> str:
    return SHORT_HTML
