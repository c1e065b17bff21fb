from __future__ import annotations

import pytest

from src.staff_directory.staff_directory.documents.layout import (
    LayoutCursor,
    PageGeometry,
    columns,
    fit_text,
    wrap_text,
)


def mono(text, font_name, font_size):
    """Every character is half the font size wide."""
    return len(text) * font_size * 0.5


def test_page_geometry():
    g = PageGeometry(600, 800, margin_left=40, margin_right=60, margin_top=30, margin_bottom=50)
    assert (g.left, g.right, g.top, g.bottom) == (40, 540, 770, 50)
    assert g.content_width == 500
    assert g.content_height == 720


def test_columns_are_proportional_and_contiguous():
    cols = columns(780, (1, 2, 3, 2, 1, 2, 2, 1, 2), x0=30)
    assert len(cols) == 9
    assert cols[0].x == 30
    assert cols[0].width == pytest.approx(48.75)
    assert cols[2].width == pytest.approx(3 * 48.75)
    for left, right in zip(cols, cols[1:]):
        assert right.x == pytest.approx(left.right)
    assert cols[-1].right == pytest.approx(810)


def test_columns_reject_zero_weights():
    with pytest.raises(ValueError):
        columns(100, (0, 0))


def test_cursor_breaks_page_when_block_does_not_fit():
    pages = []
    cursor = LayoutCursor(PageGeometry(100, 200, 10, 10, 10, 10), on_new_page=lambda c: pages.append(c.page_number))

    assert cursor.take(100) == 190
    assert cursor.y == 90
    assert cursor.fits(80)
    assert not cursor.fits(81)

    assert cursor.ensure_space(81) is True
    assert pages == [2]
    assert cursor.y == 190


def test_cursor_does_not_break_an_empty_page_for_oversized_blocks():
    cursor = LayoutCursor(PageGeometry(100, 200, 10, 10, 10, 10))
    assert cursor.at_page_top
    assert cursor.ensure_space(500) is False
    assert cursor.page_number == 1


def test_new_page_callback_can_draw_repeated_header():
    def header(c):
        c.take(20)

    cursor = LayoutCursor(PageGeometry(100, 200, 10, 10, 10, 10), on_new_page=header)
    cursor.take(170)
    top = cursor.take(16)
    assert cursor.page_number == 2
    assert top == 170
    assert cursor.remaining == 144


def test_wrap_text_breaks_on_words():
    lines = wrap_text("forest office at station road", "Helvetica", 10, 60, measure=mono)
    assert lines == ["forest", "office at", "station road"]
    assert all(mono(line, "", 10) <= 60 for line in lines)


def test_wrap_text_hard_splits_long_words():
    assert wrap_text("abcdefghijklmnop", "Helvetica", 10, 30, measure=mono) == ["abcdef", "ghijkl", "mnop"]


def test_wrap_text_keeps_explicit_line_breaks_and_empty_text():
    assert wrap_text("one\ntwo", "Helvetica", 10, 100, measure=mono) == ["one", "two"]
    assert wrap_text("", "Helvetica", 10, 100, measure=mono) == [""]


def test_fit_text_truncates_with_ellipsis():
    assert fit_text("short", "Helvetica", 10, 100, measure=mono) == "short"
    fitted = fit_text("Management Service Officer", "Helvetica", 10, 60, measure=mono)
    assert fitted == "Managemen..."
    assert mono(fitted, "", 10) <= 60


def test_fit_text_with_real_font_metrics():
    fitted = fit_text("Asst.District Forest Officer", "Helvetica", 8.5, 60)
    assert fitted.endswith("...")
    from reportlab.pdfbase.pdfmetrics import stringWidth

    assert stringWidth(fitted, "Helvetica", 8.5) <= 60
