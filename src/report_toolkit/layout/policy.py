"""
Module: layout.policy

Purpose:
    Resolve table layout magnitudes for the paginator.
    Each value comes from the caller's override hook when one is
    present, otherwise from the built-in default.

Key Classes:
    - LayoutPolicy: Override-or-default resolution
    - StaticLayoutOverrides: Fixed override values

Dependencies:
    - dataclasses (std)

Used By:
    - layout.paginator: Queries the policy on every row and header
    - order_report: Supplies StaticLayoutOverrides
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .paginator import ReportPaginator
    from .sinks import LayoutOverrides


# Default table magnitudes (canvas units)
DEFAULT_HEADER_HEIGHT = 20.0
DEFAULT_CELL_HEIGHT = 50.0
DEFAULT_ITEM_SPACING = 20.0
DEFAULT_COLUMN_SPACING = 20.0


class LayoutPolicy:
    """
    Resolves header height, cell height, item spacing and column spacing.

    Nothing is cached: every call asks the override source again.

    Example:
        >>> LayoutPolicy().cell_height()
        50.0
        >>> LayoutPolicy(StaticLayoutOverrides(cell_height=30)).cell_height()
        30.0
    """

    def __init__(self, overrides: Optional["LayoutOverrides"] = None):
        self.overrides = overrides

    def header_height(self, paginator: Optional["ReportPaginator"] = None) -> float:
        return self._resolve("table_header_height", DEFAULT_HEADER_HEIGHT, paginator)

    def cell_height(self, paginator: Optional["ReportPaginator"] = None) -> float:
        return self._resolve("table_cell_height", DEFAULT_CELL_HEIGHT, paginator)

    def item_spacing(self, paginator: Optional["ReportPaginator"] = None) -> float:
        return self._resolve("table_item_spacing", DEFAULT_ITEM_SPACING, paginator)

    def column_spacing(self, paginator: Optional["ReportPaginator"] = None) -> float:
        return self._resolve("table_column_spacing", DEFAULT_COLUMN_SPACING, paginator)

    def _resolve(
        self,
        hook_name: str,
        default: float,
        paginator: Optional["ReportPaginator"],
    ) -> float:
        """
        Ask the override source for a value.

        Args:
            hook_name: Name of the override method to call
            default: Value used when the hook is absent or returns None
            paginator: Passed through to the hook

        Returns:
            Resolved magnitude as float
        """
        if self.overrides is None:
            return default
        hook = getattr(self.overrides, hook_name, None)
        if hook is None:
            return default
        value = hook(paginator)
        if value is None:
            return default
        return float(value)


@dataclass(frozen=True)
class StaticLayoutOverrides:
    """
    Fixed layout overrides (immutable).

    Fields left as None defer to the defaults.

    Attributes:
        header_height: Table header height
        cell_height: Table row height
        item_spacing: Vertical gap after each header/row
        column_spacing: Horizontal gap between columns
    """

    header_height: Optional[float] = None
    cell_height: Optional[float] = None
    item_spacing: Optional[float] = None
    column_spacing: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate overrides on construction."""
        for name in ("header_height", "cell_height"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive: {value}")
        for name in ("item_spacing", "column_spacing"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")

    def table_header_height(self, paginator: "ReportPaginator") -> Optional[float]:
        return self.header_height

    def table_cell_height(self, paginator: "ReportPaginator") -> Optional[float]:
        return self.cell_height

    def table_item_spacing(self, paginator: "ReportPaginator") -> Optional[float]:
        return self.item_spacing

    def table_column_spacing(self, paginator: "ReportPaginator") -> Optional[float]:
        return self.column_spacing
