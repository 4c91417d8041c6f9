import logging
import sys

from gomoku.app.core.settings import settings_store
from gomoku.app.engine.board import Board, Cell
from gomoku.app.engine.exceptions import GameError
from gomoku.app.engine.rules import RulesEngine, GameStatus
from gomoku.app.engine.search import SearchEngine

HELP = "Commands: 'row col' to play, u = undo, r = redo, n = new game, q = quit"


def choose_opponent() -> bool:
    while True:
        answer = input("Play against the computer? [Y/n]: ").strip().lower()
        if answer in ("", "y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        print("Please answer y or n.")


def main():
    logging.basicConfig(level=logging.WARNING)
    settings = settings_store.get()

    print("=======================================")
    print(f"   GOMOKU: {settings.win_length} in a row")
    print("=======================================")

    vs_computer = choose_opponent()

    board = Board(settings.board_size, settings.board_size, settings.win_length)
    game = RulesEngine(board)
    # Computer plays O, the human always opens as X
    ai_agent = SearchEngine(side=Cell.O) if vs_computer else None

    print(HELP)
    print(board.get_visual_board())

    while True:
        if game.is_game_over:
            if game.status is GameStatus.WON:
                winner_name = "Computer" if ai_agent and game.winner is ai_agent.side else f"Player {game.winner}"
                print(f"\nGame Over! Winner: {winner_name}")
            else:
                print("\nGame Over! It's a Draw.")
            again = input("New game? [y/N]: ").strip().lower()
            if again not in ("y", "yes"):
                break
            game.reset()
            print(board.get_visual_board())
            continue

        # --- Computer Turn ---
        if ai_agent and game.current_side is ai_agent.side:
            print("\nComputer is thinking...")
            move = ai_agent.select_move(board)
            if move is None:
                print("Computer has no move.")
                break
            game.apply_move(*move)
            print(f"Computer plays: {move[0]} {move[1]}")
            print("\n" + board.get_visual_board(last_move=move))
            continue

        # --- Human Turn ---
        user_input = input(f"\nPlayer {game.current_side} move: ").strip().lower()
        try:
            if user_input == "q":
                break
            elif user_input == "u":
                # Against the computer, step back to the human's previous turn
                steps = 2 if ai_agent and len(game.history) >= 2 else 1
                if not any([game.undo() for _ in range(steps)]):
                    print("No moves to undo.")
            elif user_input == "r":
                if not game.redo():
                    print("No moves to redo.")
            elif user_input == "n":
                game.reset()
            else:
                parts = user_input.replace(",", " ").split()
                if len(parts) != 2:
                    print(HELP)
                    continue
                row, col = int(parts[0]), int(parts[1])
                game.apply_move(row, col)
        except ValueError:
            print("Please enter two numbers: row col")
            continue
        except GameError as e:
            print(f"Invalid: {e}")
            continue

        last = game.last_move
        print("\n" + board.get_visual_board(last_move=(last.row, last.col) if last else None))

    print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
