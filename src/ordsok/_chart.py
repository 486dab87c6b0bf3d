"""Line-chart series for the pivoted table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._types import COUNT, ChartSeries, Series
from ._years import percent

if TYPE_CHECKING:
    from ._types import Table, ViewOptions

MAX_SERIES = 5


def derive_chart(
    table: Table, options: ViewOptions | None = None, *, limit: int = MAX_SERIES
) -> ChartSeries:
    """Pick the top word-groups by total and return one series each.

    Ranking uses the table's (already filtered) rows; hidden series from
    ``options`` are skipped after ranking. Values are percentages when the
    table shows percent columns, raw counts otherwise, computed the same way
    as the table cells.
    """
    hidden = options.hidden_series if options is not None else frozenset()
    if not table.pivot_by_year:
        return ChartSeries(years=[], series=[], max_value=0)

    years = [c.year for c in table.columns if c.kind == COUNT and c.year]
    year_totals = table.year_totals or {}

    ranked = sorted(table.rows, key=lambda row: row.total, reverse=True)
    visible = [row for row in ranked if row.id not in hidden]

    series: list[Series] = []
    for row in visible[:limit]:
        if table.show_percent:
            values = [
                percent(row.values.get(y, 0), year_totals.get(y, 0))
                for y in years
            ]
        else:
            values = [row.values.get(y, 0) for y in years]
        series.append(Series(id=row.id, values=values))

    max_value = max((v for s in series for v in s.values), default=0)
    return ChartSeries(years=years, series=series, max_value=max_value)
