import sys
import json
from parser import parse_components, build_circuit
from solvers import simulate
from utils import print_result, instructions


def run(components_path: str, as_json: bool = False, draw: bool = False):
    components = parse_components(components_path)
    result = simulate(components)

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return result

    circ = build_circuit(components)
    circ.propagate_voltages()
    circ.print_indices()
    print_result(result)
    if draw:
        circ.draw_graph()  # <-- Graph of the circuit topology
    return result


if __name__ == "__main__":
    args = sys.argv[1:]
    if "--instructions" in args:
        print("\n".join(instructions()))
        sys.exit(0)
    paths = [a for a in args if not a.startswith("--")]
    if not paths:
        print("Usage: python main.py <circuit.json> [--json] [--draw] | --instructions")
        sys.exit(1)
    try:
        run(paths[0], as_json="--json" in args, draw="--draw" in args)
    except (OSError, ValueError) as e:
        print("Could not load circuit:", e)
        sys.exit(1)
