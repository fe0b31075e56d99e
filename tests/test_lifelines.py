from lyricquiz.analysis.sampling import make_rng
from lyricquiz.pipelines.lifelines import LIFELINE_BY_COMMAND, Lifeline, LifelineInventory, random_lifeline


def test_inventory_starts_with_one_of_each():
    inventory = LifelineInventory()
    assert all(inventory.count(kind) == 1 for kind in Lifeline)


def test_consume_until_empty():
    inventory = LifelineInventory()
    assert inventory.consume(Lifeline.SKIP)
    assert not inventory.consume(Lifeline.SKIP)
    assert inventory.count(Lifeline.SKIP) == 0
    # other kinds are independent
    assert inventory.count(Lifeline.SHOW_TITLE_ALBUM) == 1


def test_grant_restores_consumable_lifeline():
    inventory = LifelineInventory()
    inventory.consume(Lifeline.SHOW_PREV_LINES)
    inventory.grant(Lifeline.SHOW_PREV_LINES)
    inventory.grant(Lifeline.SHOW_PREV_LINES)
    assert inventory.count(Lifeline.SHOW_PREV_LINES) == 2


def test_random_lifeline_covers_every_kind():
    rng = make_rng(0)
    drawn = {random_lifeline(rng) for _ in range(200)}
    assert drawn == set(Lifeline)


def test_commands_map_to_kinds():
    assert LIFELINE_BY_COMMAND == {
        "?t": Lifeline.SHOW_TITLE_ALBUM,
        "?p": Lifeline.SHOW_PREV_LINES,
        "?s": Lifeline.SKIP,
    }


def test_describe_lists_counts():
    inventory = LifelineInventory()
    inventory.consume(Lifeline.SKIP)
    text = inventory.describe()
    assert "Skip Question Lifelines (?s): [bold red]0[/bold red]" in text
    assert "Show Title Lifelines (?t): [bold red]1[/bold red]" in text
