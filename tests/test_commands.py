from functools import partial

from richtext_engine.commands import (
    CommandParams,
    CommandRegistry,
    execute_block_command,
    get_active_tags_at_range,
    get_tags_at_offset,
    load_default_commands,
    toggle_blockquote,
    toggle_bullet_list,
    toggle_heading,
    toggle_numbered_list,
)
from richtext_engine.commands.inline import toggle_tag_command
from richtext_engine.commands.models import CommandRef
from richtext_engine.document import BlockDocument, create_block
from richtext_engine.styles import StyleSegment, StyleValue

BOLD = StyleValue(bold=True)
ITALIC = StyleValue(italic=True)


def make_doc(text: str = "ABCDEF") -> BlockDocument:
    return BlockDocument.with_default_styles(text)


def make_alert_registry() -> CommandRegistry:
    registry = load_default_commands(CommandRegistry())
    registry.register(
        CommandRef(
            id="alert",
            handler=partial(toggle_tag_command, tag="alert"),
            kind="inline",
            tag="alert",
        )
    )
    return registry


def segments(doc: BlockDocument, index: int = 0) -> tuple[StyleSegment, ...]:
    return doc.blocks[index].styles


def test_bold_then_bold_again_on_same_range() -> None:
    doc = make_doc()

    bolded = execute_block_command(doc, "bold", 0, 3)
    cleared = execute_block_command(bolded, "bold", 0, 3)

    assert segments(bolded) == (StyleSegment(0, 3, BOLD),)
    assert segments(cleared) == ()
    assert cleared.version == doc.version + 2


def test_toggle_twice_restores_segments_across_blocks() -> None:
    doc = execute_block_command(make_doc("abc\ndef"), "italic", 0, 2)

    toggled = execute_block_command(doc, "bold", 1, 6)
    restored = execute_block_command(toggled, "bold", 1, 6)

    assert segments(toggled, 0) == (StyleSegment(0, 2, ITALIC), StyleSegment(1, 3, BOLD))
    assert segments(toggled, 1) == (StyleSegment(0, 2, BOLD),)
    assert [block.styles for block in restored.blocks] == [
        block.styles for block in doc.blocks
    ]


def test_remove_keeps_parts_outside_selection() -> None:
    doc = execute_block_command(make_doc(), "underline", 0, 6)

    updated = execute_block_command(doc, "underline", 2, 4)

    underline = StyleValue(underline=True)
    assert segments(updated) == (
        StyleSegment(0, 2, underline),
        StyleSegment(4, 6, underline),
    )


def test_adjacent_toggles_merge_into_one_segment() -> None:
    doc = execute_block_command(make_doc(), "bold", 0, 2)

    updated = execute_block_command(doc, "bold", 2, 5)

    assert segments(updated) == (StyleSegment(0, 5, BOLD),)


def test_malformed_commands_return_the_same_document() -> None:
    doc = make_doc()

    assert execute_block_command(doc, "sparkle", 0, 3) is doc
    assert execute_block_command(doc, "bold", 3, 3) is doc
    assert execute_block_command(doc, "bold", 4, 2) is doc
    assert execute_block_command(doc, "bold", -1, 2) is doc
    assert execute_block_command(doc, "bold", 7, 9) is doc


def test_unknown_tag_is_a_noop() -> None:
    doc = BlockDocument.from_text("plain")

    assert execute_block_command(doc, "bold", 0, 3) is doc


def test_end_past_document_is_clipped_for_inline_commands() -> None:
    doc = make_doc("abc")

    updated = execute_block_command(doc, "code", 1, 99)

    assert segments(updated) == (StyleSegment(1, 3, StyleValue(code=True)),)


def test_tags_at_offset_reverse_maps_styles() -> None:
    doc = execute_block_command(make_doc(), "bold", 0, 3)
    doc = execute_block_command(doc, "italic", 0, 3)

    assert get_tags_at_offset(doc, 1) == ("bold", "italic")
    assert get_tags_at_offset(doc, 3) == ()
    assert get_active_tags_at_range(doc, 0) == ("bold", "italic")


def test_text_color_replaces_existing_color_in_window() -> None:
    doc = execute_block_command(make_doc(), "textColor", 0, 4, CommandParams(color="red"))

    updated = execute_block_command(doc, "textColor", 1, 3, CommandParams(color="blue"))

    red, blue = StyleValue(color="red"), StyleValue(color="blue")
    assert set(segments(updated)) == {
        StyleSegment(0, 1, red),
        StyleSegment(1, 3, blue),
        StyleSegment(3, 4, red),
    }
    assert updated.version == doc.version + 1


def test_text_color_supports_background() -> None:
    doc = execute_block_command(
        make_doc(), "textColor", 0, 2, CommandParams(background_color="#ff0")
    )

    assert segments(doc) == (StyleSegment(0, 2, StyleValue(background_color="#ff0")),)


def test_text_color_without_color_is_a_noop() -> None:
    doc = make_doc()

    assert execute_block_command(doc, "textColor", 0, 3) is doc


def test_remove_color_strips_only_color() -> None:
    doc = execute_block_command(make_doc(), "bold", 0, 6)
    doc = execute_block_command(doc, "textColor", 0, 6, CommandParams(color="red"))

    updated = execute_block_command(doc, "removeColor", 0, 6)

    assert segments(updated) == (StyleSegment(0, 6, BOLD),)


def test_block_toggle_changes_type_only() -> None:
    doc = make_doc("Title")

    heading = execute_block_command(doc, "heading-1", 0, 5)
    back = execute_block_command(heading, "heading-1", 0, 5)

    assert heading.blocks[0].type == "heading-1"
    assert heading.blocks[0].content == "Title"
    assert back.blocks[0].type == "paragraph"


def test_block_toggle_covers_every_block_in_range() -> None:
    doc = make_doc("a\nb\nc")

    updated = execute_block_command(doc, "bullet-list", 0, 3)

    assert [block.type for block in updated.blocks] == [
        "bullet-list",
        "bullet-list",
        "paragraph",
    ]


def test_block_toggle_end_out_of_range_uses_start_block() -> None:
    doc = make_doc("a\nb\nc")

    updated = execute_block_command(doc, "blockquote", 2, 50)

    assert [block.type for block in updated.blocks] == [
        "paragraph",
        "blockquote",
        "paragraph",
    ]


def test_toggle_heading_writes_prefix_and_shifts_styles() -> None:
    block = create_block("Title", styles=[StyleSegment(0, 5, BOLD)])
    doc = BlockDocument(blocks=(block,))

    heading = toggle_heading(doc, 0, 5, 1)
    back = toggle_heading(heading, 0, 7, 1)

    assert heading.blocks[0].type == "heading-1"
    assert heading.blocks[0].content == "# Title"
    assert heading.blocks[0].styles == (StyleSegment(2, 7, BOLD),)
    assert back.blocks[0].content == "Title"
    assert back.blocks[0].styles == (StyleSegment(0, 5, BOLD),)


def test_toggle_heading_swaps_level_marker() -> None:
    doc = toggle_heading(make_doc("Title"), 0, 5, 1)

    updated = toggle_heading(doc, 0, 7, 3)

    assert updated.blocks[0].type == "heading-3"
    assert updated.blocks[0].content == "### Title"


def test_toggle_numbered_list_numbers_from_one() -> None:
    doc = make_doc("a\nb\nc")

    numbered = toggle_numbered_list(doc, 0, 5)
    plain = toggle_numbered_list(numbered, 0, numbered.length)

    assert [block.content for block in numbered.blocks] == ["1. a", "2. b", "3. c"]
    assert [block.content for block in plain.blocks] == ["a", "b", "c"]
    assert {block.type for block in plain.blocks} == {"paragraph"}


def test_toggle_bullet_and_quote_prefixes() -> None:
    doc = make_doc("item")

    bullet = toggle_bullet_list(doc, 0, 4)
    quote = toggle_blockquote(doc, 0, 4)

    assert (bullet.blocks[0].type, bullet.blocks[0].content) == ("bullet-list", "• item")
    assert (quote.blocks[0].type, quote.blocks[0].content) == ("blockquote", "> item")
    assert toggle_bullet_list(bullet, 0, 6).blocks[0].content == "item"


def test_prefix_toggle_with_start_outside_document_is_a_noop() -> None:
    doc = make_doc("a")

    assert toggle_heading(doc, 5, 6, 1) is doc
    assert toggle_heading(doc, 0, 1, 4) is doc


def test_remove_color_keeps_other_properties_of_custom_tag() -> None:
    doc = BlockDocument.with_default_styles(
        "ABCDEF", extra={"alert": {"bold": True, "color": "red"}}
    )
    doc = execute_block_command(doc, "alert", 0, 6, registry=make_alert_registry())

    updated = execute_block_command(doc, "removeColor", 2, 4)

    alert = StyleValue(bold=True, color="red")
    assert segments(updated) == (
        StyleSegment(0, 2, alert),
        StyleSegment(2, 4, BOLD),
        StyleSegment(4, 6, alert),
    )
    assert get_tags_at_offset(updated, 3) == ("bold",)


def test_recolor_keeps_bold_of_custom_tag() -> None:
    doc = BlockDocument.with_default_styles(
        "ABCD", extra={"alert": {"bold": True, "color": "red"}}
    )
    doc = execute_block_command(doc, "alert", 0, 4, registry=make_alert_registry())

    updated = execute_block_command(
        doc, "textColor", 0, 4, CommandParams(color="blue")
    )

    assert segments(updated) == (
        StyleSegment(0, 4, BOLD),
        StyleSegment(0, 4, StyleValue(color="blue")),
    )
