import logging
import pytest
from src.desmos_asm.parser import parse
from src.desmos_asm.encoding import (
    encode, build_action_table, render, Template, ActionAllocator, ActionEntry, gen_instruction,
)
from src.desmos_asm.isa import Mnemonic, spec
from src.desmos_asm.linker import LabelTable
from src.desmos_asm.ast import Instruction
from src.desmos_asm.diagnostics import ArityMismatchError, UndefinedLabelError

def _pipe(src: str):
    r = parse(src, filename="<mem>")
    return encode(r.instructions, r.labels, filename="<mem>")

@pytest.mark.parametrize("line, expected", [
    ("mov $a 5",  r"I_{nternalAction0} = R_{a} \to 5"),
    ("add $a 1",  r"I_{nternalAction0} = R_{a} \to R_{a} + 1"),
    ("sub $a $b", r"I_{nternalAction0} = R_{a} \to R_{a} - R_{b}"),
    ("mul $a 2",  r"I_{nternalAction0} = R_{a} \to R_{a} \cdot 2"),
    ("div $a 2",  r"I_{nternalAction0} = R_{a} \to \frac{R_{a}}{2}"),
    ("sin $a $b", r"I_{nternalAction0} = R_{a} \to \sin\left(R_{b}\right)"),
    ("cos $a $b", r"I_{nternalAction0} = R_{a} \to \cos\left(R_{b}\right)"),
    ("tan $a $b", r"I_{nternalAction0} = R_{a} \to \tan\left(R_{b}\right)"),
])
def test_assign_templates(line, expected):
    enc = _pipe(line)
    assert [e.text for e in enc.expressions] == [expected]

def test_jumps_resolve_to_label_lines():
    src = "top:\nje $a 1 top\njne $a $b top\njmp top\n"
    enc = _pipe(src)
    assert [e.text for e in enc.expressions] == [
        r"I_{nternalAction0} = \left\{R_{a}=1:G_{oto}\left(1\right)\right\}",
        r"I_{nternalAction1} = \left\{R_{a}\neq R_{b}:G_{oto}\left(1\right)\right\}",
        r"I_{nternalAction2} = G_{oto}\left(1\right)",
    ]

def test_forward_reference():
    enc = _pipe("jmp foo\nmov $a 1\n\nfoo:\nlit done\n")
    assert enc.expressions[0].text == r"I_{nternalAction0} = G_{oto}\left(4\right)"

def test_lit_joins_args_and_mints_nothing():
    enc = _pipe("lit y = x ^ 2\nlit\n")
    assert [e.text for e in enc.expressions] == ["y = x ^ 2", ""]
    assert enc.actions == []

def test_actions_one_per_non_lit_instruction():
    enc = _pipe("mov $a 1\nlit a\nadd $a 1\nlit b\njmp L\nL:\n")
    assert [a.action for a in enc.actions] == [
        "I_{nternalAction0}", "I_{nternalAction1}", "I_{nternalAction2}",
    ]
    assert [a.line for a in enc.actions] == [1, 3, 5]

def test_arity_mismatch(caplog):
    with caplog.at_level(logging.DEBUG, logger="src.desmos_asm"):
        with pytest.raises(ArityMismatchError) as ei:
            _pipe("mov $a 1\nadd $a\n")
    assert "Expected 2 arguments, got 1" in str(ei.value)
    assert ei.value.mnemonic == "add" and ei.value.line == 2
    # el error se propaga; sólo queda una traza de depuración
    assert [r.levelno for r in caplog.records] == [logging.DEBUG]
    assert "Expected 2 arguments, got 1" in caplog.text

def test_undefined_label():
    with pytest.raises(UndefinedLabelError) as ei:
        _pipe("jmp missing\n")
    assert ei.value.label == "missing"
    assert ei.value.line == 1
    assert ei.value.mnemonic == "jmp"
    assert "in command jmp (1)" in str(ei.value)

def test_undefined_label_in_branch_names_command():
    with pytest.raises(UndefinedLabelError, match=r"in command jne \(2\)"):
        _pipe("mov $a 1\njne $a 0 nowhere\n")

def test_allocator_is_strictly_increasing():
    alloc = ActionAllocator()
    names = [alloc.mint(n) for n in (3, 1, 2)]
    assert names == ["I_{nternalAction0}", "I_{nternalAction1}", "I_{nternalAction2}"]
    assert [e.line for e in alloc.entries] == [3, 1, 2]

def test_action_table_sorted_and_without_trailing_comma():
    entries = [ActionEntry("I_{nternalAction0}", 5), ActionEntry("I_{nternalAction1}", 2)]
    expr = build_action_table(entries)
    assert expr.text == (
        r"F_{a}=\left\{T=2: I_{nternalAction1},T=5: I_{nternalAction0}\right\},i_{ncrement}"
    )

def test_action_table_empty():
    assert build_action_table([]).text == r"F_{a}=\left\{\right\},i_{ncrement}"

def test_render_init():
    assert render(Template.INIT, reg="R_{a}") == "R_{a} = 0"

_ARGS = {"ASSIGN": ("$a", "1"), "BRANCH": ("$a", "1", "L"), "JUMP": ("L",), "LIT": ("x",)}

@pytest.mark.parametrize("m", list(Mnemonic))
def test_minting_follows_isa_table(m):
    labels = LabelTable()
    labels.define("L", 1)
    alloc = ActionAllocator()
    s = spec(m)
    expr = gen_instruction(Instruction(m, _ARGS[s.itype], 2), labels, alloc)
    if s.emits_action:
        assert [e.line for e in alloc.entries] == [2]
        assert expr.text.startswith("I_{nternalAction0} = ")
    else:
        assert alloc.entries == []
        assert expr.text == "x"
