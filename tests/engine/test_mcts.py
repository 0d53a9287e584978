"""Tests for the MCTS search engine."""

import random
import threading

from starhalma.engine.bot_strategy import MCTSAgent
from starhalma.engine.mcts import MCTSNode, SearchTree, mcts_search, simulate
from starhalma.game.board import Board
from starhalma.game.moves import Move, generate_moves
from starhalma.game.scoring import evaluate
from starhalma.game.types import Corner, HexCoord

TWO_PLAYERS = [Corner.SOUTH, Corner.NORTH]


def _legal(board: Board, player: Corner, move: Move) -> bool:
    return any(
        m.origin == move.origin and m.destination == move.destination
        for m in generate_moves(board, player)
    )


def test_mcts_returns_legal_move(star_board):
    move, stats = mcts_search(
        star_board, Corner.SOUTH, Corner.NORTH, TWO_PLAYERS,
        time_limit_ms=150, rng=random.Random(3),
    )
    assert move is not None
    assert _legal(star_board, Corner.SOUTH, move)
    assert stats.iterations > 0
    assert stats.node_count == stats.iterations + 1


def test_mcts_does_not_mutate_board(star_board):
    before = star_board.occupants()
    mcts_search(star_board, Corner.SOUTH, Corner.NORTH, TWO_PLAYERS, time_limit_ms=100)
    assert star_board.occupants() == before


def test_mcts_no_moves_returns_none(open_board):
    move, stats = mcts_search(open_board, Corner.SOUTH, Corner.NORTH, TWO_PLAYERS, time_limit_ms=50)
    assert move is None
    assert stats.iterations == 0


def test_mcts_single_legal_move():
    # A lone piece at the end of a two-cell strip has exactly one step.
    board = Board.from_region([HexCoord(0, 0), HexCoord(1, -1)])
    board.set_occupant(HexCoord(0, 0), Corner.SOUTH)
    move, _ = mcts_search(board, Corner.SOUTH, Corner.NORTH, TWO_PLAYERS, time_limit_ms=100)
    assert move is not None
    assert (move.origin, move.destination) == (HexCoord(0, 0), HexCoord(1, -1))


def test_mcts_zero_budget_falls_back_to_untried_move(star_board):
    move, stats = mcts_search(
        star_board, Corner.SOUTH, Corner.NORTH, TWO_PLAYERS, time_limit_ms=0,
    )
    assert stats.iterations == 0
    assert move is not None
    assert _legal(star_board, Corner.SOUTH, move)


def test_mcts_cancel_event_stops_search(star_board):
    cancel = threading.Event()
    cancel.set()
    move, stats = mcts_search(
        star_board, Corner.SOUTH, Corner.NORTH, TWO_PLAYERS,
        time_limit_ms=10_000, cancel_event=cancel,
    )
    assert stats.iterations == 0
    assert stats.elapsed_ms < 1000
    assert move is not None


def test_mcts_six_players(six_player_config):
    from starhalma.game.board import create_board

    board = create_board(six_player_config)
    move, _ = mcts_search(
        board, Corner.NORTH_EAST, Corner.SOUTH_EAST, six_player_config.active_players,
        time_limit_ms=150,
    )
    assert move is not None
    assert _legal(board, Corner.NORTH_EAST, move)


class TestSearchTree:
    def test_parent_indices_and_backprop(self, open_board):
        root = MCTSNode(board=open_board, player=Corner.SOUTH)
        tree = SearchTree(root)
        a = tree.add_child(0, MCTSNode(board=open_board, player=Corner.SOUTH))
        b = tree.add_child(a, MCTSNode(board=open_board, player=Corner.SOUTH))
        assert tree.nodes[b].parent == a
        assert tree.nodes[a].parent == 0
        assert root.children == [a]

        tree.backpropagate(b, 3.0)
        tree.backpropagate(b, -1.0)
        assert [tree.nodes[i].visits for i in (0, a, b)] == [2, 2, 2]
        assert [tree.nodes[i].wins for i in (0, a, b)] == [1, 1, 1]

    def test_unvisited_child_selected_first(self, open_board):
        tree = SearchTree(MCTSNode(board=open_board, player=Corner.SOUTH))
        visited = tree.add_child(0, MCTSNode(board=open_board, player=Corner.SOUTH))
        fresh = tree.add_child(0, MCTSNode(board=open_board, player=Corner.SOUTH))
        tree.backpropagate(visited, 1.0)
        assert tree.best_child_uct(0, 1.4) == fresh

    def test_most_visited_child(self, open_board):
        tree = SearchTree(MCTSNode(board=open_board, player=Corner.SOUTH))
        assert tree.most_visited_child(0) is None
        a = tree.add_child(0, MCTSNode(board=open_board, player=Corner.SOUTH))
        b = tree.add_child(0, MCTSNode(board=open_board, player=Corner.SOUTH))
        tree.backpropagate(b, 1.0)
        tree.backpropagate(b, 1.0)
        tree.backpropagate(a, 1.0)
        assert tree.most_visited_child(0) == b

    def test_uct_value(self, open_board):
        node = MCTSNode(board=open_board, player=Corner.SOUTH, visits=4, wins=2)
        assert node.uct_value(16, 0.0) == 0.5
        assert node.uct_value(16, 1.4) > 0.5
        assert MCTSNode(board=open_board, player=Corner.SOUTH).uct_value(16, 1.4) == float("inf")


def test_simulate_zero_depth_is_static_evaluation(star_board):
    value = simulate(star_board, Corner.SOUTH, Corner.NORTH, TWO_PLAYERS, 0, random.Random(0))
    assert value == evaluate(star_board, Corner.SOUTH, Corner.NORTH)


def test_simulate_leaves_input_untouched(star_board):
    before = star_board.occupants()
    simulate(star_board, Corner.SOUTH, Corner.NORTH, TWO_PLAYERS, 15, random.Random(0))
    assert star_board.occupants() == before


class TestMCTSAgent:
    def test_setters(self):
        agent = MCTSAgent(Corner.SOUTH, Corner.NORTH, TWO_PLAYERS, time_limit_ms=500)
        agent.set_time_limit(120)
        agent.set_opponent(Corner.NORTH_EAST)
        assert agent.time_limit_ms == 120
        assert agent.opponent is Corner.NORTH_EAST

    def test_records_stats(self, star_board):
        agent = MCTSAgent(Corner.SOUTH, Corner.NORTH, TWO_PLAYERS, time_limit_ms=100, seed=5)
        move = agent.get_best_move(star_board)
        assert move is not None
        assert move.score is not None and 0.0 <= move.score <= 1.0
        assert agent.last_stats is not None
        assert agent.last_stats.iterations > 0
