"""Tests for inline annotation expansion."""

import pytest

from thener.annotations import (
    TAG_ID_MARKER,
    expand,
    resolve_inline_tag,
    strip_comment,
)


def test_expands_id_class_and_comment():
    line = "@#intro Some text @.highlight here @// note"

    assert expand(line) == (
        "<span id='intro'></span> Some text <span class='highlight'></span> here "
    )


def test_plain_line_unchanged():
    assert expand("Just a sentence, with an email a@b.com.") == "Just a sentence, with an email a@b.com."


def test_empty_line():
    assert expand("") == ""


def test_multiple_ids_on_one_line():
    assert expand("@#one and @#two") == "<span id='one'></span> and <span id='two'></span>"


def test_marker_inside_a_word():
    assert expand("see@.note") == "see<span class='note'></span>"


def test_token_runs_to_next_whitespace():
    assert expand("@#a-b_c.d\tnext") == "<span id='a-b_c.d'></span>\tnext"


def test_marker_without_name_is_left_alone():
    assert expand("ends with @#") == "ends with @#"
    assert expand("@. spaced") == "@. spaced"


def test_empty_name_stops_scanning_that_marker():
    # The scan for ids stops at the bare marker; later ids stay as written.
    assert expand("@# then @#real") == "@# then @#real"
    # Classes are scanned separately and still expand.
    assert expand("@# then @.cls") == "@# then <span class='cls'></span>"


def test_replacement_is_not_rescanned():
    assert resolve_inline_tag("@#a", TAG_ID_MARKER, lambda t: f"@#{t}!") == "@#a!"


def test_name_ends_at_next_marker():
    assert expand("@#a@#b") == "<span id='a'></span><span id='b'></span>"
    assert expand("@.x@#y") == "<span class='x'></span><span id='y'></span>"


def test_name_ends_before_comment():
    assert expand("@.x@//y") == "<span class='x'></span>"


def test_name_ends_at_quote_or_angle_bracket():
    assert expand("@#a'b") == "<span id='a'></span>'b"
    assert expand("@.cls<b>") == "<span class='cls'></span><b>"


def test_marker_followed_by_marker_is_left_alone():
    assert expand("@#@#foo") == "@#@#foo"
    assert expand("@#@.foo") == "@#<span class='foo'></span>"


def test_comment_at_line_start_drops_everything():
    assert expand("@// whole line is a comment") == ""


def test_only_first_comment_marker_counts():
    assert strip_comment("keep @// drop @// also drop") == "keep "


def test_markers_inside_comment_are_dropped():
    assert expand("text @// @#hidden @.gone") == "text "


def test_import_text_is_not_special_here():
    assert expand("@import chapter") == "@import chapter"


@pytest.mark.parametrize(
    "line",
    [
        "@#intro Some text @.highlight here @// note",
        "# Heading @#top",
        "@.lead paragraph",
        "no markers at all",
        "@# bare",
        "@#@#foo",
        "@#@.foo",
        "@.x@//y",
        "@.x@#y",
        "@#a'b <i>@.c</i>",
        "",
    ],
)
def test_expansion_is_idempotent(line):
    once = expand(line)
    assert expand(once) == once
