# topmark:header:start
#
#   project      : StructEmit
#   file         : test_table_formatter.py
#   file_relpath : tests/formatters/test_table_formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the table backend: records, column paths and both render modes."""

from __future__ import annotations

import pytest

from structemit.core.attrs import FormatterAttrs
from structemit.core.errors import MissingNameError
from structemit.formatters.table_formatter import TableFormatter, render_table


def _servers(f: TableFormatter) -> None:
    f.open_array_section("servers")
    f.open_object_section("")
    f.dump_string("name", "a")
    f.dump_unsigned("port", 80)
    f.close_section()
    f.open_object_section("")
    f.dump_string("name", "bb")
    f.close_section()
    f.close_section()


def test_records_form_rows_in_grid_mode() -> None:
    """Each object in a top-level array becomes one row; absent cells are blank."""
    f = TableFormatter()
    _servers(f)

    assert f.render() == (
        "+------+------+\n"
        "| name | port |\n"
        "+------+------+\n"
        "| a    | 80   |\n"
        "| bb   |      |\n"
        "+------+------+\n"
    )


def test_records_form_blocks_in_keyval_mode() -> None:
    """Key/value mode writes one line per cell and a blank line between rows."""
    f = TableFormatter(keyval=True)
    _servers(f)

    assert f.render() == "name=a\nport=80\n\nname=bb\n"


def test_nested_sections_produce_dotted_columns() -> None:
    """Columns are the path from the record down to the scalar."""
    f = TableFormatter(keyval=True)
    f.open_array_section("hosts")
    f.open_object_section("")
    f.dump_string("name", "h1")
    f.open_object_section("addr")
    f.dump_string("city", "Ghent")
    f.close_section()
    f.open_array_section("tags")
    f.dump_string("", "x")
    f.dump_string("", "y")
    f.close_section()
    f.close_section()
    f.close_section()

    assert f.render() == "name=h1\naddr.city=Ghent\ntags=x\ntags1=y\n"


def test_repeated_labels_are_suffixed() -> None:
    """A label used twice under the same parent gets a numeric suffix."""
    f = TableFormatter(keyval=True)
    f.open_object_section("")
    f.dump_string("entry", "x")
    f.dump_string("entry", "y")
    f.dump_string("entry", "z")
    f.close_section()

    assert f.render() == "entry=x\nentry1=y\nentry2=z\n"


def test_top_level_scalar_list_forms_one_cell_rows() -> None:
    """Scalars directly in a top-level array are rows of their own."""
    f = TableFormatter()
    f.open_array_section("ids")
    f.dump_unsigned("", 1)
    f.dump_unsigned("", 2)
    f.close_section()

    assert f.render() == "+-----+\n| ids |\n+-----+\n| 1   |\n| 2   |\n+-----+\n"


def test_top_level_object_is_a_single_row() -> None:
    """Without an enclosing array all cells land in one row."""
    f = TableFormatter()
    f.open_object_section("cfg")
    f.dump_bool("on", True)
    f.dump_int("delta", -4)
    f.close_section()

    assert f.render() == (
        "+------+-------+\n"
        "| on   | delta |\n"
        "+------+-------+\n"
        "| true | -4    |\n"
        "+------+-------+\n"
    )


def test_scalar_without_section_uses_default_column() -> None:
    """A bare scalar is listed under the ``value`` column."""
    f = TableFormatter(keyval=True)
    f.dump_float("", 1.5)

    assert f.render() == "value=1.5\n"


def test_columns_follow_first_appearance() -> None:
    """Columns first seen in later rows are appended after earlier ones."""
    f = TableFormatter(keyval=False)
    f.open_array_section("")
    f.open_object_section("")
    f.dump_string("b", "1")
    f.close_section()
    f.open_object_section("")
    f.dump_string("a", "2")
    f.dump_string("b", "3")
    f.close_section()
    f.close_section()

    header: str = f.render().splitlines()[1]
    assert header == "| b | a |"


def test_attrs_namespace_and_raw_data() -> None:
    """Attributes follow the value, namespaces prefix it, raw data follows the table."""
    f = TableFormatter(keyval=True)
    f.open_object_section("")
    f.dump_string_with_attrs("v", "t", FormatterAttrs.from_flat("id", "1"))
    f.dump_format_ns("k", "ns", "%d", 3)
    f.close_section()
    f.write_raw_data("-- end --\n")

    assert f.render() == 'v=t id="1"\nk=ns.3\n-- end --\n'


def test_object_child_needs_a_name() -> None:
    """Cells inside object sections need a column name."""
    f = TableFormatter()
    f.open_object_section("")

    with pytest.raises(MissingNameError):
        f.dump_string("", "x")


def test_empty_table_renders_nothing() -> None:
    """No rows means no output."""
    f = TableFormatter()
    f.open_array_section("xs")
    f.close_section()

    assert f.render() == ""
    assert f.get_len() == 0


def test_get_len_counts_pending_value_without_committing() -> None:
    """The reported size includes a pending cell; the cell stays pending."""
    f = TableFormatter()
    f.open_object_section("")
    sink = f.dump_stream("msg")
    sink.write("hi")

    size: int = f.get_len()
    assert not sink.closed
    assert size == len(f.render().encode("utf-8"))
    assert sink.closed


def test_render_table_helper() -> None:
    """The public helper pads to the widest cell of each column."""
    out: str = render_table([{"k": "long value"}, {"k": "x", "n": "1"}], ["k", "n"])

    assert out.splitlines() == [
        "+------------+---+",
        "| k          | n |",
        "+------------+---+",
        "| long value |   |",
        "| x          | 1 |",
        "+------------+---+",
    ]


def test_line_breaks_and_surrogates_stay_on_one_line() -> None:
    """Line breaks in headers and cells are escaped; lone surrogates become U+FFFD."""
    f = TableFormatter()
    f.open_array_section("rows")
    f.open_object_section("row")
    f.dump_string("a\nb", "one\r\ntwo")
    f.dump_string("s", "x\ud800")
    f.close_section()
    f.close_section()

    assert f.render().splitlines() == [
        "+------------+----+",
        "| a\\nb       | s  |",
        "+------------+----+",
        "| one\\r\\ntwo | x\ufffd |",
        "+------------+----+",
    ]
    assert f.get_len() == len(f.render().encode("utf-8"))


def test_keyval_escapes_line_breaks() -> None:
    """Key/value lines keep one cell per line."""
    out: str = render_table([{"k\r": "a\nb"}], ["k\r"], keyval=True)

    assert out == "k\\r=a\\nb\n"
