"""
Search Result Rendering

Renders search results into the HTML fragment shown under the search box.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from catalog_search.search.searcher import SearchResults, SearchState

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class ResultsRenderer:
    """HTML fragments for the prompt, not-found and results states."""

    def __init__(self, template_dir: str | Path = TEMPLATE_DIR):
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html"]),
        )

    def render(self, results: SearchResults | None) -> str:
        """
        Render results for display.

        The query and every document field are HTML-escaped by the template
        engine, so user input never renders as markup.
        """
        if results is None or results.state == SearchState.PROMPT:
            return self.render_empty()
        if results.state == SearchState.NOT_FOUND:
            return self.render_not_found(results.query)

        sections = []
        if results.collections:
            sections.append(("Collections", results.collections))
        if results.snippets:
            sections.append(("Snippets", results.snippets))
        return self._render("omnisearch/results.html", sections=sections)

    def render_empty(self) -> str:
        return self._render("omnisearch/empty.html")

    def render_not_found(self, query: str) -> str:
        return self._render("omnisearch/not_found.html", query=query)

    def _render(self, name: str, **context) -> str:
        return self.env.get_template(name).render(**context).strip()


# Global instance
renderer = ResultsRenderer()
