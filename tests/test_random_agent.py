"""
Tests for RandomAgent class.
"""
from wallgame.ai.agents.random_agent import RandomAgent
from wallgame.core.game import new_game
from wallgame.core.move_generator import legal_moves
from wallgame.core.moves import Movement, Placement


def movement_game():
    game = new_game(board_size=5, max_walls=10)
    p0 = [(2, 3), (0, 0), (4, 0), (0, 4)]
    p1 = [(4, 4), (3, 4), (4, 3), (1, 4)]
    for a, b in zip(p0, p1):
        game.apply_placement(0, *a)
        game.apply_placement(1, *b)
    return game


def test_random_agent_initialization():
    """Test that RandomAgent initializes correctly."""
    agent = RandomAgent(1)
    assert agent.player_id == 1
    assert agent.rng is not None

    agent_seeded = RandomAgent(0, seed=42)
    assert agent_seeded.rng is not None


def test_random_agent_select_action_empty_board():
    """Test that RandomAgent selects a legal placement on an empty board."""
    game = new_game(board_size=5)
    agent = RandomAgent(0, seed=42)

    move = agent.select_action(game)

    assert isinstance(move, Placement)
    assert game.board.is_empty(move.x, move.y)


def test_random_agent_selects_legal_steps():
    """Test that RandomAgent only picks from legal moves."""
    game = movement_game()
    agent = RandomAgent(0, seed=1)
    moves = legal_moves(game, 0)

    for _ in range(20):
        move = agent.choose_move(game)
        assert isinstance(move, Movement)
        assert move in moves


def test_random_agent_reproducibility():
    """Test that agents with the same seed pick the same moves."""
    game = new_game(board_size=5)

    picks1 = [RandomAgent(0, seed=7).choose_move(game) for _ in range(3)]
    picks2 = [RandomAgent(0, seed=7).choose_move(game) for _ in range(3)]

    assert picks1 == picks2


def test_random_agent_no_moves():
    """Test that RandomAgent returns None when its pieces are stuck."""
    game = movement_game()
    for x, y in game.players[0].pieces:
        game.board.territory[y, x] = 0

    assert RandomAgent(0, seed=3).choose_move(game) is None


def test_random_agent_wall_choice():
    """Test walls are chosen among the legal options."""
    game = movement_game()
    agent = RandomAgent(0, seed=5)
    assert agent.choose_wall(game) is None

    game.apply_movement(0, 2, 3, 2, 2)
    assert agent.choose_wall(game) in game.wall_options(0)


def test_random_agents_play_full_game():
    """Test two random agents can play a small game to the end."""
    game = new_game(board_size=4, max_walls=None, allow_undo=False)
    agents = [RandomAgent(0, seed=1), RandomAgent(1, seed=2)]

    turns = 0
    while not game.is_terminal() and turns < 500:
        agents[game.current_player].play_turn(game)
        turns += 1

    assert game.is_terminal()
    assert game.winners()
    assert sum(game.scores()) <= 16
