import json
from src.desmos_asm.ast import Expression, Clickable
from src.desmos_asm.writers import to_latex_lines, to_text, to_json, write_text, write_json

EXPRS = [Expression("R_{a} = 0"), Expression("S=F_{a}", clickable=Clickable(True, "F_{a}"))]

def test_text_forms():
    assert to_latex_lines(EXPRS) == ["R_{a} = 0", "S=F_{a}"]
    assert to_text(EXPRS) == "R_{a} = 0\nS=F_{a}"

def test_json_export_shape():
    data = json.loads(to_json(EXPRS))
    assert data == {"exprs": [
        {"type": "expression", "latex": "R_{a} = 0"},
        {"type": "expression", "latex": "S=F_{a}",
         "clickableInfo": {"enabled": True, "latex": "F_{a}"}},
    ]}

def test_write_files(tmp_path):
    txt = tmp_path / "out.txt"
    js = tmp_path / "out.json"
    write_text(EXPRS, str(txt))
    write_json(EXPRS, str(js))
    assert txt.read_text(encoding="utf-8") == "R_{a} = 0\nS=F_{a}\n"
    assert json.loads(js.read_text(encoding="utf-8"))["exprs"][0]["latex"] == "R_{a} = 0"
