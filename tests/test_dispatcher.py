import pytest

from slclient.controller.dispatcher import NOT_CONNECTED_MESSAGE, CommandDispatcher
from slclient.model.geometry import Coordinate, ORIGIN


class FakeTransport:
    def __init__(self, connected=True):
        self.is_connected = connected
        self.sent = []

    def send(self, line):
        self.sent.append(line)


@pytest.fixture
def transport():
    return FakeTransport()


def test_direction_moves_map_and_is_sent(graph, transport):
    dispatcher = CommandDispatcher(transport, map_provider=lambda: graph)
    assert dispatcher.handle_input("  Norden ") == []
    assert graph.position == Coordinate(0, -1, 0)
    # the server gets the command exactly as typed
    assert transport.sent == ["  Norden "]
    assert dispatcher.awaiting_response


def test_other_commands_are_only_sent(graph, transport):
    dispatcher = CommandDispatcher(transport, map_provider=lambda: graph)
    dispatcher.handle_input("schau")
    assert graph.position == ORIGIN
    assert transport.sent == ["schau"]


def test_without_open_map_nothing_is_recorded(transport):
    dispatcher = CommandDispatcher(transport)
    dispatcher.handle_input("n")
    assert transport.sent == ["n"]


def test_not_connected_still_moves_map(graph):
    transport = FakeTransport(connected=False)
    dispatcher = CommandDispatcher(transport, map_provider=lambda: graph)
    assert dispatcher.handle_input("o") == [NOT_CONNECTED_MESSAGE]
    assert graph.position == Coordinate(1, 0, 0)
    assert transport.sent == []
    assert not dispatcher.awaiting_response


@pytest.mark.parametrize("command", ["", "   "])
def test_blank_input_is_ignored(graph, transport, command):
    dispatcher = CommandDispatcher(transport, map_provider=lambda: graph)
    assert dispatcher.handle_input(command) == []
    assert transport.sent == []
    assert graph.position == ORIGIN


def test_rejected_read_only_move_is_still_sent(graph, transport):
    graph.set_read_only(True)
    dispatcher = CommandDispatcher(transport, map_provider=lambda: graph)
    dispatcher.handle_input("s")
    assert graph.position == ORIGIN
    assert transport.sent == ["s"]


def test_incoming_prompt_is_stripped_and_first_reply_flagged(transport):
    dispatcher = CommandDispatcher(transport)
    dispatcher.handle_input("schau")

    assert dispatcher.process_incoming("> Ein dunkler Raum.") == ("Ein dunkler Raum.", True)
    assert dispatcher.process_incoming("Ausgänge: n, s") == ("Ausgänge: n, s", False)
