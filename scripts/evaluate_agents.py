#!/usr/bin/env python3
"""
Simple evaluation script for testing agents against each other.
"""
import sys
import time
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from wallgame.core.config import GameConfig
from wallgame.core.player import Difficulty, PlayerConfig
from wallgame.ai.agents.minimax_agent import MinimaxAgent
from wallgame.ai.agents.random_agent import RandomAgent
from wallgame.ai.training.self_play import SelfPlayManager


def evaluate_agents(agent1_name, agent1_builder, agent2_name, agent2_builder,
                    num_games=20, board_size=7, max_walls=10):
    """
    Evaluate two agents by playing multiple games with alternating seats.

    Args:
        agent1_name: Name of agent1 for display
        agent1_builder: Callable taking a seat index and returning an agent
        agent2_name: Name of agent2 for display
        agent2_builder: Callable taking a seat index and returning an agent
        num_games: Number of games to play
        board_size: Board side length
        max_walls: Wall budget per player

    Returns:
        dict: Results summary
    """
    config = GameConfig(board_size=board_size, max_walls=max_walls, allow_undo=False,
                        players=[PlayerConfig.ai("Seat 1"), PlayerConfig.ai("Seat 2")])
    manager = SelfPlayManager([agent1_builder, agent2_builder], config=config, verbose=False)

    print(f"Evaluating {agent1_name} vs {agent2_name}")
    print(f"Playing {num_games} games on {board_size}x{board_size} with seat swapping...")
    print()

    start_time = time.time()
    manager.play_games(num_games)
    elapsed = time.time() - start_time

    stats = manager.session_stats
    total_games = stats['games_played']
    agent1_wins, agent2_wins = stats['wins']
    agent1_win_rate = agent1_wins / total_games * 100 if total_games > 0 else 0
    agent2_win_rate = agent2_wins / total_games * 100 if total_games > 0 else 0

    print(f"=== Results after {total_games} games ({elapsed:.1f}s) ===")
    print(f"{agent1_name}: {agent1_wins} wins ({agent1_win_rate:.1f}%)")
    print(f"{agent2_name}: {agent2_wins} wins ({agent2_win_rate:.1f}%)")
    print(f"Shared: {stats['shared_wins']}, Unfinished: {stats['unfinished']}")
    print()

    return {
        'total_games': total_games,
        'agent1_wins': agent1_wins,
        'agent2_wins': agent2_wins,
        'agent1_win_rate': agent1_win_rate,
        'agent2_win_rate': agent2_win_rate,
        'elapsed_time': elapsed,
    }


def main():
    """Main evaluation function."""
    print("Wall Game Agent Evaluation")
    print("==========================")
    print()

    results = evaluate_agents(
        "MinimaxAgent (medium)", lambda seat: MinimaxAgent(seat, difficulty=Difficulty.MEDIUM),
        "RandomAgent", lambda seat: RandomAgent(seat, seed=123 + seat),
        num_games=20,
    )

    print("=== Acceptance Criteria ===")
    print(f"MinimaxAgent win rate: {results['agent1_win_rate']:.1f}%")
    print("Required: >50%")
    if results['agent1_win_rate'] > 50:
        print("PASS: MinimaxAgent beats RandomAgent")
    else:
        print("FAIL: MinimaxAgent did not beat RandomAgent")

    return results


if __name__ == "__main__":
    main()
