"""
Self-play system for agent-vs-agent games.

Plays games between agents through the rule engine and optionally records
encoded positions for analysis or training.
"""
import json
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import torch

from ...core.config import GameConfig
from ...core.game import Game
from ...core.player import PlayerConfig
from ..models.state_encoding import encode_action, encode_game_state


class SelfPlayGame:
    """
    Manages a single agent-vs-agent game.

    Each agent drives the seat matching its ``player_id``. Agents that have
    no legal step pass their turn.
    """

    def __init__(self,
                 agents: List,
                 config: Optional[GameConfig] = None,
                 collect_data: bool = False,
                 max_turns: int = 400,
                 verbose: bool = False):
        """
        Initialize self-play game.

        Args:
            agents: One agent per seat, in seat order
            config: Game configuration; seats default to AI players
            collect_data: Whether to record encoded positions
            max_turns: Maximum agent turns before the game is cut off
            verbose: Whether to print game progress
        """
        if config is None:
            config = GameConfig(board_size=7, max_walls=10, allow_undo=False,
                                players=[PlayerConfig.ai(f"AI {i + 1}")
                                         for i in range(len(agents))])
        if len(agents) != len(config.players):
            raise ValueError(f"expected {len(config.players)} agents, got {len(agents)}")

        self.agents = agents
        self.config = config
        self.collect_data = collect_data
        self.max_turns = max_turns
        self.verbose = verbose

        self.game_trajectory = []
        self.move_times = []

    def play_game(self) -> Dict[str, Any]:
        """
        Play a complete game and return results.

        Returns:
            dict: Winners, scores, turn count, timing and optional trajectory
        """
        game = Game(self.config)
        turns = 0
        start_time = time.time()

        if self.verbose:
            print("Starting self-play game...")
            for player, agent in zip(game.players, self.agents):
                print(f"{player.name} ({player.color}): {type(agent).__name__}")

        while not game.is_terminal() and turns < self.max_turns:
            player_id = game.current_player
            agent = self.agents[player_id]

            pre_move_state = None
            if self.collect_data:
                pre_move_state = encode_game_state(game, player_id)

            move_start = time.time()
            move, wall = agent.play_turn(game)
            self.move_times.append(time.time() - move_start)

            if self.verbose:
                name = game.players[player_id].name
                if move is None:
                    print(f"Turn {turns + 1}: {name} passes")
                else:
                    suffix = f", wall {wall}" if wall is not None else ""
                    print(f"Turn {turns + 1}: {name} plays {move}{suffix}")

            if self.collect_data and move is not None:
                self.game_trajectory.append({
                    'turn': turns,
                    'player': player_id,
                    'state': pre_move_state,
                    'action': encode_action(move, game.board_size),
                })

            turns += 1

        game_duration = time.time() - start_time
        finished = game.is_terminal()

        results = {
            'outcome': 'finished' if finished else 'max_turns',
            'winners': game.winners() if finished else [],
            'scores': game.scores(),
            'turns': turns,
            'duration': game_duration,
            'avg_move_time': float(np.mean(self.move_times)) if self.move_times else 0.0,
            'trajectory': self.game_trajectory if self.collect_data else [],
            'final_board': game.board.cells.copy(),
            'agents': [type(agent).__name__ for agent in self.agents],
        }

        if self.verbose:
            print(f"Game finished: {results['outcome']}")
            print(f"Scores: {results['scores']}, winners: {results['winners']}")
            print(f"Turns: {turns}, Duration: {game_duration:.2f}s")

        return results


class SelfPlayManager:
    """
    Manages multiple self-play games.

    Seats rotate between games so that every agent plays every seat.
    """

    def __init__(self,
                 agent_builders: List[Callable[[int], Any]],
                 config: Optional[GameConfig] = None,
                 max_turns: int = 400,
                 verbose: bool = True):
        """
        Initialize self-play manager.

        Args:
            agent_builders: One callable per contestant; called with a seat
                index, returns an agent for that seat
            config: Game configuration shared by all games
            max_turns: Turn limit per game
            verbose: Whether to print progress
        """
        self.agent_builders = agent_builders
        self.config = config
        self.max_turns = max_turns
        self.verbose = verbose
        self.reset_stats()

    def reset_stats(self):
        """Reset session statistics."""
        self.session_stats = {
            'games_played': 0,
            'wins': [0] * len(self.agent_builders),
            'shared_wins': 0,
            'unfinished': 0,
            'total_turns': 0,
            'total_duration': 0.0,
        }

    def play_games(self, num_games: int, collect_data: bool = False) -> List[Dict]:
        """
        Play several games, rotating seats.

        Returns:
            list: Result dicts; each carries ``seating``, the contestant index
            for every seat
        """
        all_results = []
        count = len(self.agent_builders)

        if self.verbose:
            print(f"Starting {num_games} self-play games...")

        for game_idx in range(num_games):
            seating = [(seat + game_idx) % count for seat in range(count)]
            agents = [self.agent_builders[contestant](seat)
                      for seat, contestant in enumerate(seating)]

            self_play_game = SelfPlayGame(agents, config=self.config,
                                          collect_data=collect_data,
                                          max_turns=self.max_turns, verbose=False)
            result = self_play_game.play_game()
            result['seating'] = seating
            all_results.append(result)
            self._update_stats(result)

            if self.verbose and (game_idx + 1) % 10 == 0:
                print(f"Completed {game_idx + 1}/{num_games} games")

        if self.verbose:
            self._print_session_summary()

        return all_results

    def _update_stats(self, result: Dict[str, Any]):
        stats = self.session_stats
        stats['games_played'] += 1
        stats['total_turns'] += result['turns']
        stats['total_duration'] += result['duration']

        if result['outcome'] != 'finished':
            stats['unfinished'] += 1
        elif len(result['winners']) == 1:
            stats['wins'][result['seating'][result['winners'][0]]] += 1
        else:
            stats['shared_wins'] += 1

    def _print_session_summary(self):
        stats = self.session_stats
        total_games = stats['games_played']

        if total_games == 0:
            return

        print(f"\n=== Self-Play Session Summary ===")
        print(f"Games played: {total_games}")
        for index, wins in enumerate(stats['wins']):
            print(f"Contestant {index}: {wins} wins ({wins / total_games:.2%})")
        print(f"Shared wins: {stats['shared_wins']}, Unfinished: {stats['unfinished']}")
        print(f"Average turns per game: {stats['total_turns'] / total_games:.1f}")
        print(f"Average game duration: {stats['total_duration'] / total_games:.2f}s")

    def save_session_data(self, results: List[Dict], save_dir: str):
        """
        Save session data to disk.

        Results and statistics go to JSON; recorded trajectories, if any,
        are saved with ``torch.save``.

        Returns:
            dict: Paths of the written files
        """
        save_dir = Path(save_dir)
        save_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        def convert_numpy_types(obj):
            """Recursively convert numpy types and tensors to Python types."""
            if isinstance(obj, np.ndarray):
                return obj.tolist()
            elif isinstance(obj, torch.Tensor):
                return obj.detach().cpu().numpy().tolist()
            elif isinstance(obj, np.integer):
                return int(obj)
            elif isinstance(obj, np.floating):
                return float(obj)
            elif isinstance(obj, dict):
                return {key: convert_numpy_types(value) for key, value in obj.items()}
            elif isinstance(obj, list):
                return [convert_numpy_types(item) for item in obj]
            return obj

        summaries = [{key: value for key, value in result.items() if key != 'trajectory'}
                     for result in results]
        results_file = save_dir / f"selfplay_results_{timestamp}.json"
        with open(results_file, 'w') as f:
            json.dump(convert_numpy_types(summaries), f, indent=2)

        stats_file = save_dir / f"selfplay_stats_{timestamp}.json"
        with open(stats_file, 'w') as f:
            json.dump(self.session_stats, f, indent=2)

        paths = {'results': results_file, 'stats': stats_file}

        trajectories = [result['trajectory'] for result in results if result['trajectory']]
        if trajectories:
            trajectory_file = save_dir / f"selfplay_trajectories_{timestamp}.pt"
            torch.save(trajectories, trajectory_file)
            paths['trajectories'] = trajectory_file

        if self.verbose:
            print(f"\nSession data saved to {save_dir}")
            for name, path in paths.items():
                print(f"{name.capitalize()}: {path}")

        return paths
