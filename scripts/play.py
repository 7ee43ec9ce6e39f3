#!/usr/bin/env python3
"""
CLI interface for playing the wall game against humans or AI agents.
"""
import sys
import os
import time

# Add the parent directory to Python path so we can import wallgame
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from wallgame.core.config import GameConfig
from wallgame.core.game import Game
from wallgame.core.moves import Phase
from wallgame.core.player import Difficulty, PlayerConfig
from wallgame.ai.agents.minimax_agent import MinimaxAgent, agent_for_player


PIECE_SYMBOLS = "ABCD"
TERRITORY_SYMBOLS = "abcd"


def display_board(game):
    """Display the current board state in ASCII format."""
    board = game.board
    size = board.size

    print("\n    " + "".join(f"{x:^4d}" for x in range(size)))
    for y in range(size + 1):
        line = "   +"
        for x in range(size):
            edge = y == 0 or y == size
            line += "---+" if edge or board.horizontal_walls[y, x] else "   +"
        print(line)
        if y == size:
            break

        line = f"{y:2d} "
        for x in range(size):
            line += "|" if x == 0 or board.vertical_walls[y, x] else " "
            owner = board.owner_at(x, y)
            territory = board.territory_owner(x, y)
            if owner is not None:
                symbol = PIECE_SYMBOLS[owner]
            elif territory is not None:
                symbol = TERRITORY_SYMBOLS[territory]
            else:
                symbol = "."
            line += f" {symbol} "
        line += "|"
        print(line)

    for player in game.players:
        walls = "unlimited" if player.walls_left is None else player.walls_left
        status = " (surrendered)" if player.surrendered else ""
        print(f"{PIECE_SYMBOLS[player.id]} {player.name}: score {player.score}, "
              f"walls {walls}{status}")


def parse_numbers(text, count):
    """
    Parse ``count`` integers from user input like "3 4" or "3,4".

    Returns:
        tuple or None if invalid
    """
    parts = text.replace(',', ' ').split()
    if len(parts) != count:
        return None
    try:
        return tuple(int(part) for part in parts)
    except ValueError:
        return None


def parse_wall_budget(text, default=15):
    """
    Parse the wall budget answer.

    Returns:
        int, or None for an unlimited budget when the answer is blank
    """
    if not text.strip():
        return None
    walls = parse_numbers(text, 1)
    if walls is None or walls[0] < 0:
        return default
    return walls[0]


def prompt(text):
    try:
        return input(text).strip()
    except (KeyboardInterrupt, EOFError):
        print("\nExiting...")
        sys.exit(0)


def select_game_config():
    """
    Ask for board size, wall budget and the controller of every seat.

    Returns:
        GameConfig
    """
    size = parse_numbers(prompt("Board size (4-15) [9]: ") or "9", 1)
    board_size = size[0] if size else 9

    max_walls = parse_wall_budget(prompt("Walls per player (blank = unlimited): "))

    count = parse_numbers(prompt("Number of players (2-4) [2]: ") or "2", 1)
    num_players = count[0] if count and 2 <= count[0] <= 4 else 2

    players = []
    for seat in range(num_players):
        choice = prompt(f"Seat {seat + 1}: 1=Human 2=AI easy 3=AI medium 4=AI hard [1]: ") or "1"
        name = f"Player {seat + 1}"
        if choice == '2':
            players.append(PlayerConfig.ai(name, Difficulty.EASY))
        elif choice == '3':
            players.append(PlayerConfig.ai(name, Difficulty.MEDIUM))
        elif choice == '4':
            players.append(PlayerConfig.ai(name, Difficulty.HARD))
        else:
            players.append(PlayerConfig.human(name))

    return GameConfig(board_size=board_size, players=players,
                      max_walls=max_walls)


def human_turn(game, player_id):
    """
    Run one human turn.

    Returns:
        bool: False if the user quit
    """
    player = game.players[player_id]

    while True:
        if game.phase == Phase.PLACEMENT:
            text = prompt(f"{player.name}, place a piece (x y), 'undo' or 'quit': ")
        elif not game.has_moved:
            if not game.legal_moves(player_id):
                print(f"{player.name} has no legal move and passes.")
                game.pass_turn(player_id)
                return True
            text = prompt(f"{player.name}, move (fx fy tx ty), 'hint', 'pass', "
                          f"'surrender', 'undo' or 'quit': ")
        else:
            options = game.wall_options(player_id)
            if not options:
                print("No wall can be built here; turn ends.")
                game.pass_turn(player_id)
                return True
            for number, wall in enumerate(options, 1):
                print(f"  {number}. {wall.orientation.value} wall at ({wall.x}, {wall.y})")
            text = prompt("Choose a wall number, 'pass', 'undo' or 'quit': ")

        command = text.lower()
        if command in ('quit', 'exit', 'q'):
            return False
        if command == 'undo':
            result = game.undo()
            print("Undone." if result else f"Cannot undo: {result.reason.value}")
            return True
        if command == 'pass':
            result = game.pass_turn(player_id)
            if result:
                return True
            print(f"Cannot pass: {result.reason.value}")
            continue
        if command == 'surrender':
            game.surrender(player_id)
            return True
        if command == 'hint':
            hint = MinimaxAgent(player_id, difficulty=Difficulty.MEDIUM).choose_move(game)
            print(f"Hint: {hint}")
            continue

        if game.phase == Phase.PLACEMENT:
            coords = parse_numbers(text, 2)
            if coords is None:
                print("Invalid input! Please enter: x y (e.g., '3 4')")
                continue
            result = game.apply_placement(player_id, *coords)
        elif not game.has_moved:
            coords = parse_numbers(text, 4)
            if coords is None:
                print("Invalid input! Please enter: fx fy tx ty (e.g., '3 4 3 5')")
                continue
            result = game.apply_movement(player_id, *coords)
            if result:
                display_board(game)
                continue
        else:
            number = parse_numbers(text, 1)
            options = game.wall_options(player_id)
            if number is None or not 1 <= number[0] <= len(options):
                print("Invalid choice!")
                continue
            wall = options[number[0] - 1]
            result = game.apply_wall(player_id, wall.x, wall.y, wall.orientation)

        if result:
            return True
        print(f"Rejected: {result.reason.value}")


def ai_turn(agent, game, player_id):
    """Let an AI agent play a whole turn."""
    name = game.players[player_id].name
    print(f"{name} (AI) is thinking...")

    # Add small delay to make it feel more natural
    time.sleep(0.5)

    move, wall = agent.play_turn(game)
    if move is None:
        print(f"{name} (AI) passes.")
    else:
        suffix = f" and builds {wall.orientation.value} wall at ({wall.x}, {wall.y})" if wall else ""
        print(f"{name} (AI) plays {move}{suffix}")


def main():
    """Main game loop."""
    print("=" * 60)
    print("                    WALL GAME")
    print("=" * 60)
    print("Place 4 pieces each, then each turn step one piece and build")
    print("a wall next to it. Enclose areas holding only your pieces to")
    print("score them. Pieces inside your territory can no longer move.")
    print("=" * 60)

    while True:
        try:
            game = Game(select_game_config())
            break
        except ValueError as e:
            print(f"Invalid settings: {e}")
    agents = {player.id: agent_for_player(game, player.id)
              for player in game.players if game.config.players[player.id].is_ai}

    while not game.is_terminal():
        display_board(game)
        player_id = game.current_player
        print(f"\nTurn {game.turn_count} ({game.phase.value}): {game.players[player_id].name}")

        if player_id in agents:
            ai_turn(agents[player_id], game, player_id)
        elif not human_turn(game, player_id):
            print("\nThanks for playing!")
            return

    display_board(game)
    print("\n" + "=" * 60)
    winners = [game.players[i].name for i in game.winners()]
    if len(winners) == 1:
        print(f"GAME OVER - {winners[0]} wins!")
    else:
        print(f"GAME OVER - tie between {', '.join(winners)}")
    print("=" * 60)


if __name__ == "__main__":
    main()
