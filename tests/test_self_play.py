"""
Tests for self-play system.
"""
import json

import pytest
import torch
from wallgame.ai.agents.minimax_agent import MinimaxAgent
from wallgame.ai.agents.random_agent import RandomAgent
from wallgame.ai.training.self_play import SelfPlayGame, SelfPlayManager
from wallgame.core.config import GameConfig
from wallgame.core.player import PlayerConfig


def small_config(players=2):
    return GameConfig(board_size=4, max_walls=None, allow_undo=False,
                      players=[PlayerConfig.ai(f"AI {i + 1}") for i in range(players)])


def test_self_play_game_initialization():
    """Test SelfPlayGame initializes correctly."""
    agents = [RandomAgent(0, seed=42), RandomAgent(1, seed=123)]

    game = SelfPlayGame(agents, collect_data=True, max_turns=10, verbose=False)

    assert game.agents == agents
    assert game.config.board_size == 7
    assert game.collect_data == True
    assert game.max_turns == 10
    assert len(game.game_trajectory) == 0


def test_self_play_game_agent_count_mismatch():
    with pytest.raises(ValueError):
        SelfPlayGame([RandomAgent(0)], config=small_config())


def test_self_play_game_random_vs_random():
    """Test self-play game between random agents."""
    agents = [RandomAgent(0, seed=42), RandomAgent(1, seed=123)]
    game = SelfPlayGame(agents, config=small_config(), collect_data=True)

    result = game.play_game()

    assert result['outcome'] == 'finished'
    assert result['winners']
    assert len(result['scores']) == 2
    assert result['turns'] > 0
    assert result['duration'] >= 0
    assert result['agents'] == ['RandomAgent', 'RandomAgent']
    assert result['final_board'].shape == (4, 4)

    trajectory = result['trajectory']
    assert len(trajectory) > 0
    assert trajectory[0]['turn'] == 0
    assert trajectory[0]['player'] == 0
    assert trajectory[0]['state'].shape == (7, 4, 4)
    assert isinstance(trajectory[0]['action'], int)


def test_self_play_game_max_turns():
    """Test a game is cut off at the turn limit."""
    agents = [RandomAgent(0, seed=1), RandomAgent(1, seed=2)]
    game = SelfPlayGame(agents, config=small_config(), max_turns=3)

    result = game.play_game()

    assert result['outcome'] == 'max_turns'
    assert result['turns'] == 3
    assert result['winners'] == []
    assert result['trajectory'] == []


def test_self_play_minimax_vs_random():
    """Test a minimax agent plays a full game against a random one."""
    agents = [MinimaxAgent(0, depth=1), RandomAgent(1, seed=5)]
    game = SelfPlayGame(agents, config=small_config())

    result = game.play_game()

    assert result['outcome'] == 'finished'
    assert result['agents'] == ['MinimaxAgent', 'RandomAgent']


def test_self_play_three_players():
    agents = [RandomAgent(i, seed=i) for i in range(3)]
    config = GameConfig(board_size=5, max_walls=None, allow_undo=False,
                        players=[PlayerConfig.ai(f"AI {i + 1}") for i in range(3)])

    result = SelfPlayGame(agents, config=config).play_game()

    assert result['outcome'] == 'finished'
    assert len(result['scores']) == 3


def test_self_play_manager():
    """Test the manager rotates seats and tallies results."""
    builders = [lambda seat: RandomAgent(seat, seed=seat),
                lambda seat: RandomAgent(seat, seed=seat + 10)]
    manager = SelfPlayManager(builders, config=small_config(), verbose=False)

    results = manager.play_games(4)

    assert len(results) == 4
    assert results[0]['seating'] == [0, 1]
    assert results[1]['seating'] == [1, 0]

    stats = manager.session_stats
    assert stats['games_played'] == 4
    assert sum(stats['wins']) + stats['shared_wins'] + stats['unfinished'] == 4
    assert stats['total_turns'] == sum(result['turns'] for result in results)

    manager.reset_stats()
    assert manager.session_stats['games_played'] == 0


def test_save_session_data(tmp_path):
    """Test results, stats and trajectories are written to disk."""
    builders = [lambda seat: RandomAgent(seat, seed=1),
                lambda seat: RandomAgent(seat, seed=2)]
    manager = SelfPlayManager(builders, config=small_config(), verbose=False)
    results = manager.play_games(2, collect_data=True)

    paths = manager.save_session_data(results, tmp_path / "session")

    assert paths['results'].exists()
    assert paths['stats'].exists()
    assert paths['trajectories'].exists()

    with open(paths['results']) as f:
        saved = json.load(f)
    assert len(saved) == 2
    assert 'trajectory' not in saved[0]
    assert saved[0]['final_board'][0][0] in (-1, 0, 1)

    with open(paths['stats']) as f:
        assert json.load(f)['games_played'] == 2

    trajectories = torch.load(paths['trajectories'], weights_only=False)
    assert len(trajectories) == 2


def test_save_session_data_without_trajectories(tmp_path):
    builders = [lambda seat: RandomAgent(seat, seed=3),
                lambda seat: RandomAgent(seat, seed=4)]
    manager = SelfPlayManager(builders, config=small_config(), verbose=False)
    results = manager.play_games(1)

    paths = manager.save_session_data(results, tmp_path)

    assert 'trajectories' not in paths
