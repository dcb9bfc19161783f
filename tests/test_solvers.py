import copy
import json
import pickle

import pytest

from conftest import A, B, C, D, NEG, POS, led, resistor, switch, wire

from circuit import node_id
from components import (NEGATIVE_TERMINAL, POSITIVE_TERMINAL, PlacedComponent,
                        PLACEHOLDER_CURRENT)
from parser import build_circuit
from solvers import (INCOMPLETE_ERROR, SHORT_CIRCUIT_ERROR, find_series_resistor, led_current,
                     simulate)


def test_empty_circuit():
    result = simulate([])
    assert not result.is_complete
    assert not result.has_short_circuit
    assert result.to_dict()["components"] == {}
    assert set(result.nodes) == {POSITIVE_TERMINAL, NEGATIVE_TERMINAL}
    assert result.errors == ()
    assert result.warnings == ()


def test_wire_across_terminals_is_short():
    result = simulate([wire("w1", POS, NEG)])
    assert result.has_short_circuit
    assert not result.is_complete
    assert SHORT_CIRCUIT_ERROR in result.errors
    assert INCOMPLETE_ERROR in result.errors
    assert len(result.nodes) == 2


def test_led_with_resistor_lights(led_loop):
    result = simulate(led_loop)
    state = result.components["led1"]
    assert result.is_complete
    assert not result.has_short_circuit
    assert state.current == pytest.approx((9 - 2.0) / (20 + 220))
    assert state.current == pytest.approx(0.02917, abs=1e-5)
    assert state.voltage == 9.0
    assert state.power == pytest.approx(9.0 * state.current)
    assert state.is_on
    assert not state.is_burned
    assert result.errors == ()
    assert result.warnings == ()


def test_led_without_resistor_burns(bare_led_loop):
    result = simulate(bare_led_loop)
    state = result.components["led1"]
    assert state.current == pytest.approx(0.35)
    assert state.is_burned
    assert state.is_on
    assert any("burned out" in w for w in result.warnings)
    assert "350.0mA" in result.warnings[0]


def test_open_loop_is_incomplete(led_loop):
    result = simulate(led_loop[:3])
    assert not result.is_complete
    assert INCOMPLETE_ERROR in result.errors
    assert not any(st.is_on for st in result.components.values())


def test_simulate_is_deterministic(led_loop):
    first = simulate(led_loop)
    second = simulate(led_loop)
    assert first == second
    assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())


def test_simulate_keeps_no_state_between_calls(led_loop):
    simulate(led_loop)
    assert simulate([]).to_dict() == simulate([]).to_dict()
    assert len(simulate([]).nodes) == 2


def test_led_missing_positive_path():
    result = simulate([led("led1", B, C), wire("w2", C, NEG)])
    state = result.components["led1"]
    assert state.current == 0.0
    assert not state.is_on
    assert not state.is_burned
    assert any("backwards" in w for w in result.warnings)


def test_blue_led_needs_more_voltage(led_loop):
    led_loop[2] = led("led1", B, C, color="#0000FF")
    state = simulate(led_loop).components["led1"]
    assert state.current == pytest.approx((9 - 3.2) / 240)
    assert state.is_on


def test_reversed_polarity_does_not_change_current(led_loop):
    led_loop[2] = led("led1", B, C, polarity="reversed")
    assert simulate(led_loop).components["led1"].current == pytest.approx(7 / 240)


def test_unparseable_resistor_value_defaults(led_loop):
    led_loop[1] = resistor("r1", A, B, value="lots")
    assert simulate(led_loop).components["led1"].current == pytest.approx(7 / 240)


def test_larger_resistor_keeps_led_dim(led_loop):
    led_loop[1] = resistor("r1", A, B, value="10000")
    state = simulate(led_loop).components["led1"]
    assert state.current == pytest.approx(7 / 10020)
    assert not state.is_on


def test_series_resistor_must_reach_both_terminals(led_loop):
    stray = resistor("r9", (0.0, 0.15, 0.0), (0.6, 0.15, 0.0), value="1000")
    circ = build_circuit([stray] + led_loop)
    assert find_series_resistor(circ).name == "r1"


def test_wire_and_resistor_report_placeholder(led_loop):
    result = simulate(led_loop)
    w1, r1 = result.components["w1"], result.components["r1"]
    assert w1.current == PLACEHOLDER_CURRENT
    assert w1.voltage == 0.0
    assert r1.current == PLACEHOLDER_CURRENT
    assert r1.voltage == 9.0
    assert r1.power == pytest.approx(0.09)
    assert not r1.is_on and not r1.is_burned


def test_node_voltages_follow_flood(led_loop):
    nodes = simulate(led_loop).nodes
    assert nodes[POSITIVE_TERMINAL] == 9.0
    assert nodes[node_id(A)] == 9.0
    assert nodes[node_id(B)] == 0.0
    assert nodes[NEGATIVE_TERMINAL] == 0.0


def test_switch_closes_loop():
    parts = [
        wire("w1", POS, A),
        resistor("r1", A, B),
        led("led1", B, C),
        switch("s1", C, D, is_on=False),
        wire("w2", D, NEG),
    ]
    assert not simulate(parts).components["led1"].is_on
    parts[3] = switch("s1", C, D, is_on=True)
    result = simulate(parts)
    assert result.is_complete
    assert result.components["led1"].is_on
    assert "s1" in result.components


def test_accepts_placed_component_records(led_loop):
    records = [PlacedComponent.from_dict(c) for c in led_loop]
    assert simulate(records) == simulate(led_loop)


def test_result_is_frozen(led_loop):
    result = simulate(led_loop)
    with pytest.raises(AttributeError):
        result.is_complete = False
    out = result.to_dict()
    out["components"].clear()
    assert "led1" in result.components


def test_result_can_be_cached(led_loop):
    result = simulate(led_loop)
    assert copy.deepcopy(result) == result
    assert pickle.loads(pickle.dumps(result)) == result
    assert hash(result) == hash(simulate(led_loop))
    assert {result: "cached"}[simulate(led_loop)] == "cached"


def test_to_dict_shape(led_loop):
    out = simulate(led_loop).to_dict()
    assert set(out) == {"isComplete", "hasShortCircuit", "components", "nodes", "errors", "warnings"}
    assert set(out["components"]["led1"]) == {"current", "voltage", "power", "isOn", "isBurned"}
    assert out["nodes"][POSITIVE_TERMINAL] == {"voltage": 9.0}


def test_led_below_forward_voltage_carries_no_current(led_loop):
    led_loop[2] = led("led1", B, C, color="#0000ff")
    circ = build_circuit(led_loop)
    reach_pos = circ.reachable_from(POSITIVE_TERMINAL)
    reach_neg = circ.reachable_from(NEGATIVE_TERMINAL)
    br = circ.branch("led1")
    assert led_current(circ, br, reach_pos, reach_neg, source_voltage=2.0) == 0.0
    assert led_current(circ, br, reach_pos, reach_neg) == pytest.approx((9 - 3.2) / 240)


def test_open_switch_reports_idle_state():
    parts = [wire("w1", POS, A), switch("s1", A, B, is_on=False)]
    result = simulate(parts)
    assert result.components["s1"].to_dict() == {
        "current": 0.0, "voltage": 0.0, "power": 0.0, "isOn": False, "isBurned": False,
    }
    assert build_circuit(parts).open_switches == ["s1"]
