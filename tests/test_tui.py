from dbtestgen.cli.common.tui_style import OVERWRITE_CONFIRM_STYLE, TABLE_PICKER_STYLE
from dbtestgen.cli.tui import _MAX_TABLE_NAME_WIDTH, _table_choice_title, _truncate


def test_table_choice_title_is_schema_qualified():
    assert _table_choice_title("public", "orders") == "public.orders"


def test_table_choice_title_truncates_long_names():
    long_name = "x" * (_MAX_TABLE_NAME_WIDTH + 10)
    rendered = _table_choice_title("public", long_name)

    assert rendered.endswith("...")
    assert len(rendered) == _MAX_TABLE_NAME_WIDTH
    assert _truncate(long_name, _MAX_TABLE_NAME_WIDTH).endswith("...")


def test_truncate_keeps_short_text():
    assert _truncate("orders", 10) == "orders"


def _style_classes(style) -> set[str]:
    return {name for name, _ in style.style_rules}


def test_table_picker_style_covers_checkbox_prompt():
    assert _style_classes(TABLE_PICKER_STYLE) == {
        "question",
        "instruction",
        "pointer",
        "highlighted",
        "checkbox",
        "checkbox-selected",
    }


def test_overwrite_confirm_style_covers_confirm_prompt():
    assert _style_classes(OVERWRITE_CONFIRM_STYLE) == {"question", "instruction", "answer"}
