import io

from rich.console import Console

from harborcli.tables import (
    GREEN_COLOR,
    RED_COLOR,
    Column,
    TableList,
    green,
    print_table,
    red,
    render_table,
)


def test_render_contains_titles_and_cells():
    out = render_table([Column("Name", 12), Column("Kind", 8)], [["alpha", "image"]])
    assert "Name" in out
    assert "Kind" in out
    assert "alpha" in out
    assert "image" in out


def test_long_cell_is_cut_to_column_width():
    out = render_table([Column("ID", 4)], [["abcdefghij"]])
    assert "abcdefghij" not in out
    assert "…" in out


def test_all_lines_have_equal_width():
    out = render_table(
        [Column("A", 4), Column("B", 8)],
        [["1", "short"], ["22", "a much longer cell"]],
    )
    lines = out.splitlines()
    assert len(lines) >= 4
    assert len({len(line) for line in lines}) == 1


def test_markup_in_cells_is_kept_literally():
    out = render_table([Column("Name", 12)], [["[bold]x"]])
    assert "[bold]x" in out


def test_table_list_height_defaults_to_row_count():
    table = TableList([Column("A", 4)], [["1"], ["2"], ["3"]])
    assert table.height == 3


def test_print_table_writes_to_console():
    columns = [Column("Component", 16)]
    rows = [["core"]]
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, color_system=None)
    print_table(columns, rows, console)
    text = buffer.getvalue()
    rendered = render_table(columns, rows)
    assert "Component" in text
    assert "core" in text
    assert text.count("core") == rendered.count("core")


def test_green_and_red_styles():
    assert green("ok").plain == "ok"
    assert green("ok").style == GREEN_COLOR
    assert red("bad").style == RED_COLOR
    assert GREEN_COLOR == "#04B575"