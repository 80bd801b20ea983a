from slclient.model.engine import SpatialGraph
from slclient.model.geometry import Coordinate, Edge, ORIGIN
from slclient.model.io import MapSnapshot
from slclient.model.state import MapState


def assert_centered(graph: SpatialGraph):
    vp = graph.viewport
    assert graph.local_position == vp.center
    local_x, local_y = graph.local_position
    assert (vp.offset_x + local_x, vp.offset_y + local_y) == (graph.position.x, graph.position.y)


def test_fresh_graph_is_centered_on_origin(graph):
    assert graph.position == ORIGIN
    assert graph.viewport.center == (5, 4)
    assert (graph.viewport.offset_x, graph.viewport.offset_y) == (-5, -4)
    assert not graph.dirty
    assert_centered(graph)


def test_move_north_then_up(graph):
    assert graph.move("n")
    assert graph.position == Coordinate(0, -1, 0)
    assert graph.nodes == {Coordinate(0, 0, 0), Coordinate(0, -1, 0)}
    assert graph.edges == {Edge(Coordinate(0, 0, 0), Coordinate(0, -1, 0))}
    assert graph.dirty
    assert_centered(graph)

    assert graph.move("up")
    assert graph.position == Coordinate(0, -1, 1)
    assert graph.viewport.layer == 1
    assert len(graph.edges) == 2
    assert Edge(Coordinate(0, -1, 0), Coordinate(0, -1, 1)) in graph.edges
    assert_centered(graph)


def test_unknown_token_is_a_no_op(graph, renderer):
    frames_before = len(renderer.frames)
    assert not graph.move("look")
    assert graph.position == ORIGIN
    assert graph.nodes == set()
    assert not graph.dirty
    assert len(renderer.frames) == frames_before


def test_every_move_redraws(graph, renderer):
    frames_before = len(renderer.frames)
    graph.move("e")
    assert len(renderer.frames) == frames_before + 1
    assert renderer.last.player == graph.viewport.center


def test_insertion_is_idempotent(graph):
    graph.move("n")
    graph.move("s")
    assert len(graph.nodes) == 2
    # walking back along a known connection does not add a reverse edge
    assert len(graph.edges) == 1

    graph.move("n")
    graph.move("s")
    assert len(graph.nodes) == 2
    assert len(graph.edges) == 1


def test_walking_known_ground_keeps_map_clean(graph):
    graph.move("n")
    graph.move("s")
    graph.mark_saved("/tmp/somewhere.slmap")
    assert not graph.dirty

    graph.move("n")
    assert not graph.dirty


def read_only_graph(renderer=None) -> SpatialGraph:
    a, b = Coordinate(0, 0, 0), Coordinate(1, 0, 0)
    state = MapState(position=a, nodes={a, b}, edges={Edge(a, b)}, read_only=True)
    return SpatialGraph(state=state, renderer=renderer, width=11, height=9)


def test_read_only_allows_recorded_path():
    graph = read_only_graph()
    assert graph.move("east")
    assert graph.position == Coordinate(1, 0, 0)
    assert_centered(graph)

    # the edge counts in both directions
    assert graph.move("west")
    assert graph.position == Coordinate(0, 0, 0)
    assert not graph.dirty
    assert len(graph.nodes) == 2
    assert len(graph.edges) == 1


def test_read_only_rejects_unknown_cell():
    graph = read_only_graph()
    offset = (graph.viewport.offset_x, graph.viewport.offset_y)
    assert not graph.move("north")
    assert graph.position == Coordinate(0, 0, 0)
    assert (graph.viewport.offset_x, graph.viewport.offset_y) == offset
    assert Coordinate(0, -1, 0) not in graph.nodes


def test_read_only_rejects_known_cell_without_connection():
    a, b, c = Coordinate(0, 0, 0), Coordinate(1, 0, 0), Coordinate(0, 1, 0)
    state = MapState(position=a, nodes={a, b, c}, edges={Edge(a, b)}, read_only=True)
    graph = SpatialGraph(state=state, width=11, height=9)
    assert not graph.move("s")
    assert graph.position == a


def test_toggling_read_only(graph):
    graph.move("e")
    graph.set_read_only(True)
    assert graph.read_only
    assert not graph.move("e")
    graph.set_read_only(False)
    assert graph.move("e")
    assert graph.position == Coordinate(2, 0, 0)


def test_dirty_lifecycle(graph):
    snapshot = MapSnapshot(
        position=Coordinate(3, 3, 0),
        nodes={Coordinate(3, 3, 0), Coordinate(3, 2, 0)},
        edges={Edge(Coordinate(3, 3, 0), Coordinate(3, 2, 0))},
    )
    graph.replace(snapshot, filepath="/maps/keller.slmap")
    assert not graph.dirty

    graph.move("w")
    assert graph.dirty

    graph.mark_saved("/maps/keller.slmap")
    assert not graph.dirty


def test_replace_recenters_and_keeps_window_size(graph):
    snapshot = MapSnapshot(position=Coordinate(10, -7, 2), nodes={Coordinate(10, -7, 2)})
    graph.replace(snapshot)
    assert (graph.viewport.width, graph.viewport.height) == (11, 9)
    assert graph.viewport.layer == 2
    assert graph.position == Coordinate(10, -7, 2)
    assert_centered(graph)


def test_pan_moves_only_the_view(graph):
    graph.move("n")
    graph.mark_saved("/maps/a.slmap")
    offset = (graph.viewport.offset_x, graph.viewport.offset_y)

    graph.pan_by(2, -3)
    assert (graph.viewport.offset_x, graph.viewport.offset_y) == (offset[0] + 2, offset[1] - 3)
    assert graph.position == Coordinate(0, -1, 0)
    assert len(graph.nodes) == 2
    assert not graph.dirty

    # the next move starts from the player, not from the panned view
    graph.move("n")
    assert graph.position == Coordinate(0, -2, 0)
    assert_centered(graph)


def test_step_layer_takes_the_player_along(graph, renderer):
    graph.move("n")
    graph.mark_saved("/maps/a.slmap")

    graph.step_layer(1)
    assert graph.viewport.layer == 1
    assert graph.position == Coordinate(0, -1, 1)
    assert not graph.dirty
    assert renderer.last.player == graph.viewport.center
    assert renderer.last.nodes == []
    assert len(graph.nodes) == 2

    # the next move starts on the layer being viewed
    assert graph.move("n")
    assert graph.position == Coordinate(0, -2, 1)
    assert Edge(Coordinate(0, -1, 1), Coordinate(0, -2, 1)) in graph.edges
    assert Coordinate(0, -2, 0) not in graph.nodes
    assert [n.coordinate for n in renderer.last.nodes if n.coordinate.z == 1]

    graph.step_layer(-1)
    assert graph.position == Coordinate(0, -2, 0)
    assert renderer.last.player == graph.local_position


def test_teleport_recenters_without_recording(graph):
    graph.move("e")
    nodes, edges = set(graph.nodes), set(graph.edges)
    # offset is (-4, -4) after moving east; pixel (0, 0) is the top-left cell
    target = graph.teleport(0, 0, cell_pixels=20)
    assert target == Coordinate(-4, -4, 0)
    assert (graph.viewport.offset_x, graph.viewport.offset_y) == (-9, -8)
    assert graph.position == Coordinate(1, 0, 0)
    assert graph.nodes == nodes
    assert graph.edges == edges

    # works in read-only mode too
    graph.set_read_only(True)
    target = graph.teleport(45, 25, cell_pixels=20)
    assert target == Coordinate(-7, -7, 0)


def test_recenter_on_switches_layer(graph):
    graph.recenter_on(Coordinate(4, 4, -2))
    assert graph.viewport.layer == -2
    assert graph.position == Coordinate(0, 0, -2)
    assert (graph.viewport.offset_x, graph.viewport.offset_y) == (-1, 0)


def test_frame_visibility_and_vertical_markers(graph, renderer):
    graph.move("n")
    graph.move("up")

    frame = renderer.last
    assert frame.layer == 1
    assert [n.coordinate for n in frame.nodes] == [Coordinate(0, -1, 1)]
    assert frame.nodes[0].has_down and not frame.nodes[0].has_up
    # the vertical edge is never a line
    assert frame.lines == []

    graph.step_layer(-1)
    frame = renderer.last
    by_coordinate = {n.coordinate: n for n in frame.nodes}
    assert set(by_coordinate) == {Coordinate(0, 0, 0), Coordinate(0, -1, 0)}
    assert by_coordinate[Coordinate(0, -1, 0)].has_up
    assert not by_coordinate[Coordinate(0, 0, 0)].has_up
    assert len(frame.lines) == 1


def test_lines_need_one_visible_end(graph, renderer):
    graph.move("e")
    vp = graph.viewport
    # scroll so that only (1, 0) is still inside the window
    graph.pan_by(1 - vp.offset_x, 0)
    frame = renderer.last
    assert [n.coordinate for n in frame.nodes] == [Coordinate(1, 0, 0)]
    assert len(frame.lines) == 1

    # scroll both ends out of view
    graph.pan_by(50, 0)
    assert renderer.last.nodes == []
    assert renderer.last.lines == []


def test_resize_recenters_on_the_player(graph):
    graph.move("e")
    graph.pan_by(3, 3)

    graph.resize(21, 15)
    assert (graph.viewport.width, graph.viewport.height) == (21, 15)
    assert_centered(graph)

    # the same size again keeps a panned view
    graph.pan_by(2, 0)
    offset = (graph.viewport.offset_x, graph.viewport.offset_y)
    graph.resize(21, 15)
    assert (graph.viewport.offset_x, graph.viewport.offset_y) == offset

    graph.resize(0, -3)
    assert (graph.viewport.width, graph.viewport.height) == (1, 1)
    assert graph.local_position == (0, 0)


def test_first_real_size_centers_a_tiny_window():
    graph = SpatialGraph(width=1, height=1)
    graph.resize(20, 20)
    assert graph.local_position == (10, 10)
    assert_centered(graph)


def test_new_map_resets_everything(graph):
    graph.move("n")
    graph.move("up")
    graph.mark_saved("/maps/turm.slmap")
    graph.move("n")

    graph.new_map()
    assert graph.nodes == set()
    assert graph.edges == set()
    assert not graph.dirty
    assert graph.position == ORIGIN
    assert graph.viewport.layer == 0
    assert graph.state.filepath is None
    assert_centered(graph)


def test_title_shows_map_layer_and_dirty(graph):
    assert graph.title() == "Karte: Unbekannte Karte – Z: 0"
    graph.move("up")
    graph.mark_saved("/maps/turm.slmap")
    assert graph.title() == "Karte: turm – Z: 1"
    graph.move("up")
    assert graph.title() == "Karte: turm – Z: 2*"
