from __future__ import annotations

from bs4 import BeautifulSoup

"""Default stylesheet for sortable tables, injected once per document."""

__all__ = [
    "STYLE_ELEMENT_ID",
    "TABLE_CSS",
    "inject_stylesheet",
]

STYLE_ELEMENT_ID = "sortable-table-css"

TABLE_CSS = """
table.sortable { font-family: sans-serif; font-size: 12px; line-height: 1.3em; border: 1px solid #CCC; border-collapse: collapse; margin: 1rem 0 2em 0; }
table.sortable caption { background-color: #F5F3EB; padding: 7px 1ex 5px 1ex; font-size: 16px; color: #666; font-weight: bold; }
table.sortable th { text-align: left; vertical-align: middle; padding: 5px 1ex; background-color: #FFF; border-top: 2px solid #CCC; border-bottom: 1px solid #666; }
table.sortable td { vertical-align: top; padding: 2px 1ex; color: #333; border-left: 1px solid #BBD; border-right: 1px solid #BBD; }
table.sortable .sorting { cursor: pointer; padding-left: 1.2em; }
table.sortable .sorting.asc::before { content: "\\25B2 "; }
table.sortable .sorting.desc::before { content: "\\25BC "; }
table.sortable tr.even { background-color: #FFF; }
table.sortable tr.odd { background: linear-gradient(to right, #EEE, #FFF 30%, #F5F3EB); }
table.sortable tr.mod5 td { border-bottom: solid 1px rgba(171, 170, 164, 0.8); }
table.sortable tr.mod10 td { border-bottom: solid 2px rgba(171, 170, 164, 0.5); }
table.sortable tbody tr:hover { background: #FFFFEE; color: black; }
"""


def inject_stylesheet(soup: BeautifulSoup, css: str = TABLE_CSS) -> bool:
    """Insert the style element as first child of <head>; False if already there."""
    if soup.find("style", id=STYLE_ELEMENT_ID) is not None:
        return False
    head = soup.find("head")
    if head is None:
        head = soup.new_tag("head")
        html = soup.find("html")
        if html is not None:
            html.insert(0, head)
        else:
            soup.insert(0, head)
    style = soup.new_tag("style", id=STYLE_ELEMENT_ID)
    style.string = css
    head.insert(0, style)
    return True
