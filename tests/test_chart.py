"""Tests for the mood chart renderer."""
from datetime import date, timedelta

import pytest

from server.mindbridge_api.models.dashboard import ChartPoint
from server.mindbridge_api.services.chart import render_chart, to_svg


def series_with(moods: dict[int, int], length: int = 30) -> list[ChartPoint]:
    first = date(2026, 2, 14)
    return [ChartPoint(day=first + timedelta(days=i), mood=moods.get(i)) for i in range(length)]


class TestRenderChart:
    def test_gaps_split_sub_paths(self):
        drawing = render_chart(series_with({1: 3, 2: 4, 10: 2}), 600, 300)

        assert drawing.path_indices == [[1, 2], [10]]
        assert [len(path) for path in drawing.sub_paths] == [2, 1]
        assert [m.index for m in drawing.markers] == [1, 2, 10]

    def test_no_entries_draws_axes_and_labels_only(self):
        drawing = render_chart(series_with({}), 600, 300)

        assert drawing.sub_paths == []
        assert drawing.markers == []
        assert len(drawing.axes) == 3
        assert [lb.text for lb in drawing.labels] == ["Poor", "Not Great", "Okay", "Good", "Great"]

    def test_coordinates(self):
        drawing = render_chart(series_with({0: 1, 29: 5}), 600, 300, padding=40)

        first, last = drawing.markers
        assert first.center.x == pytest.approx(40)
        assert first.center.y == pytest.approx(260)
        assert last.center.x == pytest.approx(560)
        assert last.center.y == pytest.approx(40)

    def test_contiguous_run_is_one_path(self):
        drawing = render_chart(series_with({i: 3 for i in range(5, 12)}), 600, 300)
        assert drawing.path_indices == [list(range(5, 12))]

    def test_to_dict(self):
        data = render_chart(series_with({3: 4}), 400, 200).to_dict()
        assert data["width"] == 400
        assert len(data["subPaths"]) == 1
        assert data["markers"][0]["mood"] == 4
        assert len(data["labels"]) == 5


class TestSvg:
    def test_one_path_element_per_sub_path(self):
        svg = to_svg(render_chart(series_with({1: 3, 2: 4, 10: 2}), 600, 300))

        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert svg.count("<path ") == 2
        assert svg.count("<circle ") == 3
        assert svg.count("<text ") == 5
