import matplotlib

matplotlib.use("Agg")

from floorgraph import visualize  # noqa: E402
from floorgraph.graph_store import GraphStore  # noqa: E402
from floorgraph.serializer import write_tables  # noqa: E402


def _export(tmp_path):
    s = GraphStore()
    a = s.create_node("A", (0, 0), floor_id="1")
    b = s.create_node("B", (30, 40), floor_id="1")
    s.create_node("C", (10, 10), floor_id="2")
    s.create_edge(a.id, b.id, "stair")
    return write_tables(s, tmp_path)


def test_one_panel_per_floor(tmp_path):
    nodes_path, edges_path = _export(tmp_path)
    nodes, edges = visualize.read_tables(nodes_path, edges_path)
    fig = visualize.build_figure(nodes, edges, annotate=True)
    titles = [ax.get_title() for ax in fig.axes if ax.get_title()]
    assert titles == ["Floor 1", "Floor 2"]


def test_main_saves_png(tmp_path, capsys):
    nodes_path, edges_path = _export(tmp_path)
    out = tmp_path / "preview.png"
    visualize.main([str(nodes_path), str(edges_path), "--save", str(out)])
    assert out.exists() and out.stat().st_size > 0
    assert "Saved to" in capsys.readouterr().out


def test_empty_export_still_plots(tmp_path):
    nodes_path, edges_path = write_tables(GraphStore(), tmp_path)
    nodes, edges = visualize.read_tables(nodes_path, edges_path)
    fig = visualize.build_figure(nodes, edges)
    assert len(fig.axes) == 1


def test_edges_grouped_by_floor_and_type(tmp_path):
    s = GraphStore()
    a = s.create_node("A", (0, 0), floor_id="1")
    b = s.create_node("B", (30, 40), floor_id="1")
    c = s.create_node("C", (10, 10), floor_id="2")
    s.create_edge(a.id, b.id, "stair")
    s.create_edge(b.id, c.id, "elevator")
    nodes, edges = visualize.read_tables(*write_tables(s, tmp_path))

    floors = visualize.group_by_floor(nodes, edges)
    assert list(floors) == ["1", "2"]
    f1_nodes, f1_segments = floors["1"]
    assert [n["name"] for n in f1_nodes] == ["A", "B"]
    assert f1_segments == {"stair": [[(0.0, 0.0), (30.0, 40.0)]]}
    # the elevator edge spans two floors and is not drawn on either
    assert floors["2"][1] == {}
