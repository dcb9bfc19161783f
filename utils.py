import matplotlib.pyplot as plt
import networkx as nx

INSTRUCTIONS = [
    "Step 1: Connect a wire from the RED battery terminal (+) to start your circuit",
    "Step 2: Add an LED - remember the long leg goes to positive (+)!",
    "Step 3: Add a resistor to protect your LED (220 ohm is perfect)",
    "Step 4: Connect everything back to the BLACK battery terminal (-)",
    "Step 5: Press 'Run Circuit' to see your LED light up!",
    "",
    "Pro Tips:",
    "- LEDs must be 1 hole apart (anode to cathode)",
    "- Resistors must be 2 holes apart",
    "- Always use a resistor with LEDs to prevent burning!",
    "- Red terminal (+) = positive, Black terminal (-) = negative",
]


def instructions():
    return list(INSTRUCTIONS)


def print_result(result, title='Simulation result'):
    print(f"\n{title}:")
    print(f"  complete: {result.is_complete}   short circuit: {result.has_short_circuit}")
    if not result.components:
        print('  <no components>')
    else:
        header = f"  {'id':<12} {'I (mA)':>9} {'V':>7} {'P (mW)':>9}  state"
        print(header)
        for cid, st in result.components.items():
            flags = 'burned' if st.is_burned else ('on' if st.is_on else '-')
            print(f"  {cid:<12} {st.current * 1000:>9.2f} {st.voltage:>7.2f} {st.power * 1000:>9.2f}  {flags}")
    print('\nNode voltages:')
    for nid, v in result.nodes.items():
        print(f"  {nid}: {v:g} V")
    for msg in result.errors:
        print(f"ERROR: {msg}")
    for msg in result.warnings:
        print(f"WARNING: {msg}")


def draw_graph(circ, show=True):
    pos = {nid: (n.position[0], n.position[2]) for nid, n in circ.nodes.items()}
    colors = ['tab:red' if n.voltage > 0 else ('tab:blue' if n.reached else 'tab:gray')
              for n in circ.nodes.values()]
    fig = plt.figure(figsize=(6, 4))
    nx.draw_networkx_nodes(circ.G, pos, nodelist=list(circ.nodes), node_color=colors, node_size=300)
    nx.draw_networkx_labels(circ.G, pos, labels={nid: f"{n.voltage:g}V" for nid, n in circ.nodes.items()},
                            font_size=7)

    pair_map = {}
    for u, v, key, data in circ.G.edges(keys=True, data=True):
        pair = tuple(sorted((u, v)))
        pair_map.setdefault(pair, []).append((u, v, key, data))

    for pair, edges in pair_map.items():
        m = len(edges)
        for k, (u, v, key, data) in enumerate(edges):
            rad = (k - (m - 1) / 2) * 0.25 if m > 1 else 0.0
            style = 'dotted' if data.get('link') else 'solid'
            nx.draw_networkx_edges(circ.G, pos, edgelist=[(u, v)], style=style,
                                   connectionstyle=f'arc3, rad={rad}')
            if data.get('link'):
                continue
            x1, y1 = pos[u]
            x2, y2 = pos[v]
            plt.text((x1 + x2) / 2, (y1 + y2) / 2, data['object'].name, fontsize=8,
                     bbox=dict(facecolor='white', alpha=0.7, boxstyle='round'))
    plt.title('Circuit (node voltages shown)')
    plt.axis('off')
    if show:
        plt.show()
    return fig
