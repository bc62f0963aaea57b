"""Mixin classes for result dataclasses.

This module provides common formatting utilities for result summaries.
"""

from __future__ import annotations

from typing import Any


class ResultSummaryMixin:
    """Common formatting utilities for result summaries.

    Provides helper methods for generating human-readable summary reports
    with consistent formatting across all result types.
    """

    @staticmethod
    def _format_header(title: str, width: int = 80) -> str:
        """Format a section header.

        Args:
            title: Header title text
            width: Total width of the header

        Returns:
            Formatted header string with border
        """
        border = "=" * width
        padding = (width - len(title)) // 2
        centered_title = " " * padding + title
        return f"{border}\n{centered_title}\n{border}"

    @staticmethod
    def _format_value(value: Any) -> str:
        """Format a single statistic; undefined statistics render as N/A."""
        if value is None:
            return "N/A"
        if isinstance(value, bool):
            return "Yes" if value else "No"
        if isinstance(value, float):
            if abs(value) < 0.0001 and value != 0:
                return f"{value:.4e}"
            if abs(value) >= 1000:
                return f"{value:,.2f}"
            return f"{value:.4f}"
        return str(value)

    @staticmethod
    def _format_metric(label: str, value: Any, width: int = 40) -> str:
        """Format a metric label-value pair.

        Args:
            label: Metric name
            value: Metric value (None is shown as N/A)
            width: Total width for alignment

        Returns:
            Formatted metric string
        """
        formatted_value = ResultSummaryMixin._format_value(value)
        dots = "." * max(1, width - len(label) - len(formatted_value) - 2)
        return f"  {label} {dots} {formatted_value}"

    @staticmethod
    def _format_range_check(
        value: float | None,
        bounds: tuple[float, float],
        below_text: str,
        above_text: str,
    ) -> str:
        """Describe where a statistic falls against a guidance range."""
        if value is None:
            return "not computed"
        low, high = bounds
        if value < low:
            return below_text
        if value > high:
            return above_text
        return f"within guidance [{low:g}, {high:g}]"

    @staticmethod
    def _format_footer(computation_time_ms: float, width: int = 80) -> str:
        """Format the report footer with computation time.

        Args:
            computation_time_ms: Time in milliseconds
            width: Total width of the footer

        Returns:
            Formatted footer string
        """
        border = "=" * width
        if computation_time_ms < 1000:
            time_str = f"{computation_time_ms:.2f} ms"
        else:
            time_str = f"{computation_time_ms / 1000:.2f} s"
        return f"\nComputation Time: {time_str}\n{border}"

    @staticmethod
    def _format_section(title: str) -> str:
        """Format a section subheader."""
        return f"\n{title}:\n{'-' * len(title)}"

    @staticmethod
    def _format_list(items: list, max_items: int = 5, item_name: str = "item") -> str:
        """Format a list with optional truncation.

        Args:
            items: List of items to format
            max_items: Maximum items to show before truncating
            item_name: Name for items (singular form)

        Returns:
            Formatted list string
        """
        if not items:
            return "  (none)"

        result = []
        for i, item in enumerate(items[:max_items]):
            result.append(f"  {i + 1}. {item}")

        if len(items) > max_items:
            remaining = len(items) - max_items
            result.append(f"  ... and {remaining} more {item_name}(s)")

        return "\n".join(result)
