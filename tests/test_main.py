import json

from conftest import A, POS, wire

import main
from parser import build_circuit
from utils import draw_graph, instructions, print_result
from solvers import simulate


def test_run_prints_json(tmp_path, capsys, led_loop):
    path = tmp_path / "circuit.json"
    path.write_text(json.dumps(led_loop))
    result = main.run(str(path), as_json=True)
    out = json.loads(capsys.readouterr().out)
    assert out == result.to_dict()
    assert out["components"]["led1"]["isOn"] is True


def test_run_prints_report(tmp_path, capsys, bare_led_loop):
    path = tmp_path / "circuit.json"
    path.write_text(json.dumps(bare_led_loop))
    main.run(str(path))
    out = capsys.readouterr().out
    assert "Node indices" in out
    assert "burned" in out
    assert "WARNING: LED led1 burned out" in out


def test_print_result_empty(capsys):
    print_result(simulate([]))
    out = capsys.readouterr().out
    assert "<no components>" in out
    assert "battery-positive: 9 V" in out


def test_draw_graph_returns_figure(led_loop):
    import matplotlib.pyplot as plt

    circ = build_circuit(led_loop + [wire("w9", (POS[0] + 0.05, POS[1], POS[2]), A)])
    circ.propagate_voltages()
    fig = draw_graph(circ, show=False)
    assert fig is not None
    plt.close(fig)


def test_instructions_mention_resistor():
    lines = instructions()
    assert any("resistor" in line for line in lines)
    lines.append("x")
    assert instructions()[-1] != "x"


def test_print_indices_marks_reversed_led(capsys, led_loop):
    led_loop[2]["polarity"] = "reversed"
    build_circuit(led_loop).print_indices()
    out = capsys.readouterr().out
    assert "(led, R=20, reversed)" in out
