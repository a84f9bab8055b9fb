"""
Result formatting for the console.
"""

from typing import List

from .models import IndexBuildReport, QueryResult


class ResultFormatter:
    """Handles result formatting and display."""

    def __init__(self, config):
        """Initialize with configuration."""
        self.config = config

    @staticmethod
    def _clip_pad(s: str, w: int) -> str:
        if len(s) > w:
            return s[: max(0, w - 1)] + "…" if w >= 2 else s[:w]
        return s.ljust(w)

    def format_report(self, report: IndexBuildReport) -> str:
        """One-line summary of an index build."""
        line = f"{report.documents_indexed} files indexed in: {report.elapsed_millis} ms"
        extras = []
        if report.documents_skipped:
            extras.append(f"{report.documents_skipped} skipped")
        if report.storage_failures:
            extras.append(f"{report.storage_failures} vector writes failed")
        if extras:
            line += " (" + ", ".join(extras) + ")"
        return line

    def format_summary(self, result: QueryResult) -> str:
        """Header line for a search result."""
        noun = "document" if result.total_matches == 1 else "documents"
        return f"{result.total_matches} {noun} found. Time: {result.elapsed_millis} ms"

    def format_results_table(self, result: QueryResult) -> List[str]:
        """
        Render ranked hits as ASCII table lines.

        Args:
            result: Search result to render.

        Returns:
            List of lines, header and separator first.
        """
        show_scores = getattr(self.config, "SHOW_SCORES", True)
        headers = ["#", "Document"] + (["Score"] if show_scores else [])
        rows = []
        for rank, (doc_id, score) in enumerate(result.hits, start=1):
            row = [str(rank), doc_id]
            if show_scores:
                row.append(f"{score:.4f}")
            rows.append(row)

        max_widths = [3, 60, 10]
        col_widths = []
        for j, h in enumerate(headers):
            width = len(h)
            for row in rows:
                width = max(width, len(row[j]))
            col_widths.append(min(width, max_widths[j]))

        lines = [
            " | ".join(self._clip_pad(h, col_widths[i]) for i, h in enumerate(headers)),
            "-+-".join("-" * w for w in col_widths),
        ]
        for row in rows:
            lines.append(" | ".join(self._clip_pad(row[i], col_widths[i]) for i in range(len(headers))))
        return lines

    def print_results_table(self, result: QueryResult) -> None:
        """Print a search result as a clean ASCII table."""
        print(f"\n{self.format_summary(result)}")
        if result.suggestions:
            hints = ", ".join(f"{term} -> {sugg}" for term, sugg in result.suggestions.items())
            print(f"Did you mean: {hints}")
        if not result.hits:
            print("No matching documents found.")
            return

        print("\n=== Top Results ===")
        for line in self.format_results_table(result):
            print(line)
        print()
