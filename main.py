# main.py
from typing import List, Optional

import config
from services.errors import SimulatorError
from services.feed import load_initial_stocks
from services.prices import PriceEvolver, Stock
from services.session import Session

COMMANDS = '''
Available commands:
  prices                 - show the current day's stocks
  list                   - alias for prices
  next N                 - go to the next day, N times (N defaults to 1)
  day                    - show the current day number and date
  days                   - list the days visited so far
  history NAME           - show the price of one stock on every visited day
  help                   - show this help
  quit / exit            - exit the simulator
'''

COLUMNS = ("Name", "Initial", "Current", "Change")


def format_change(stock: Stock) -> str:
    is_up, absolute, percent = stock.change
    arrow = "▲" if is_up else "▼"
    if absolute == "0.00":
        arrow = " "
    return f"{arrow} {absolute} ({percent}%)"


def render_table(stocks: List[Stock]) -> List[str]:
    """Rows of the stock table, header first."""
    rows = [COLUMNS] + [(s.name, s.initial, s.current, format_change(s)) for s in stocks]
    widths = [max(len(row[i]) for row in rows) for i in range(len(COLUMNS))]
    return ["  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip() for row in rows]


def main(session: Optional[Session] = None):
    config.get_logger()
    print(config.APP_TITLE)

    if session is None:
        session = Session(evolver=PriceEvolver(seed=config.RANDOM_SEED))
        print('Loading stocks...')
        try:
            session.start(load_initial_stocks())
        except SimulatorError as e:
            print(f"Could not start the simulator: {e}")
            return 1

    print("Type 'help' to see commands.\n")

    while True:
        try:
            cmd = input(f"[Day {session.day_distance()} | {session.formatted_date()}] > ").strip()
        except (EOFError, KeyboardInterrupt):
            print('\nExiting simulator.')
            break
        if not cmd:
            continue

        parts = cmd.split()
        action = parts[0].lower()

        try:
            if action in ('quit', 'exit'):
                print('Goodbye!')
                break

            elif action in ('help', 'h', '?'):
                print(COMMANDS)

            elif action in ('prices', 'list'):
                for line in render_table(session.current_stocks()):
                    print(line)

            elif action == 'day':
                print(f"Day {session.day_distance()} | {session.formatted_date()}")

            elif action == 'days':
                for n, key in enumerate(session.timeline.day_keys(), start=1):
                    print(f"  Day {n}: {key}")

            elif action == 'next':
                try:
                    n = int(parts[1]) if len(parts) > 1 else 1
                except ValueError:
                    print("Usage: next N  (N must be a positive integer)")
                    continue
                if n < 1:
                    print('Number of days must be >= 1')
                    continue
                if n > config.MAX_ADVANCE_DAYS:
                    print(f'Number of days must be <= {config.MAX_ADVANCE_DAYS}')
                    continue
                session.next_day(n)
                print(f"Advanced {n} day(s). Day {session.day_distance()} | {session.formatted_date()}")

            elif action == 'history':
                if len(parts) < 2:
                    print('Usage: history NAME')
                    continue
                name = cmd.split(None, 1)[1]
                for key, price in session.timeline.price_history(name):
                    print(f"  {key}  {price}")

            else:
                print("Unknown command. Type 'help' to see available commands.")
        except SimulatorError as e:
            print(f"Error: {e}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
