from codecrawl.domain.instructions import Attack, Declare, EndBlock, RawInstruction, RepeatCounter
from codecrawl.domain.inventory import NodeItem
from codecrawl.services.transpiler import transpile
from tests.helpers.run_builders import make_program


def test_transpile_prepends_declarations() -> None:
    program = transpile([])
    assert program.instructions == [Declare("n", 0), Declare("enemyType", None)]
    assert program.render() == "let n = 0;\nlet enemyType;"


def test_transpile_preserves_item_order() -> None:
    program = transpile(make_program(["n=2", "n.times do", "atk()", "end"]))
    assert program.render().splitlines() == [
        "let n = 0;",
        "let enemyType;",
        "n = 2;",
        "for (let i = 0; i < n; i++) {",
        "await atk();",
        "}",
    ]
    assert program.instructions[3:] == [RepeatCounter(), Attack(), EndBlock()]


def test_transpile_resolves_items_without_stored_instruction() -> None:
    item = NodeItem(id="a", label="atk()", type="attack")
    assert transpile([item]).instructions[-1] == Attack()


def test_transpile_falls_back_to_raw_code() -> None:
    item = NodeItem(id="x", label="legacy card", type="syntax", code="doSomething();")
    assert transpile([item]).instructions[-1] == RawInstruction("doSomething();")
