"""Unit tests for the content focuser."""

from briefly.focus import FocusOptions, focus

RECIPE_OPTS = FocusOptions(markers=("ingredients", "ingredient"), context_chars=500, max_chars=1000)
PLAIN_OPTS = FocusOptions(max_chars=1000)


def test_short_text_without_marker_is_unchanged() -> None:
    text = "A short story about bread."
    assert focus(text, RECIPE_OPTS) == text


def test_marker_keeps_context_before_and_everything_after() -> None:
    head = "x" * 2000
    tail = "INGREDIENTS\n" + "step " * 5000
    text = head + tail

    focused = focus(text, RECIPE_OPTS)

    # 500 chars of context before the marker, nothing trimmed at the end
    assert focused == text[2000 - 500:]
    assert focused.endswith(tail)
    assert len(focused) > RECIPE_OPTS.max_chars


def test_marker_near_start_keeps_whole_text() -> None:
    text = "Ingredient list: flour, water. " + "y" * 5000
    assert focus(text, RECIPE_OPTS) == text


def test_marker_is_case_insensitive_and_earliest_wins() -> None:
    text = "a" * 800 + "InGrEdIeNt" + "b" * 800 + "ingredients" + "c" * 10
    focused = focus(text, RECIPE_OPTS)
    assert focused.startswith("a" * 500 + "InGrEdIeNt")


def test_no_marker_over_cap_keeps_last_chars() -> None:
    text = "".join(str(i % 10) for i in range(5000))
    focused = focus(text, RECIPE_OPTS)
    assert len(focused) == 1000
    assert focused == text[-1000:]


def test_narrative_options_ignore_the_word_ingredients() -> None:
    text = "ingredients " + "z" * 3000
    assert focus(text, PLAIN_OPTS) == text[-1000:]


def test_focus_is_idempotent() -> None:
    samples = [
        "short",
        "q" * 4000,
        "nav " * 300 + "Ingredients: eggs" + " step" * 2000,
    ]
    for opts in (RECIPE_OPTS, PLAIN_OPTS):
        for text in samples:
            once = focus(text, opts)
            assert focus(once, opts) == once
