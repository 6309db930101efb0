"""
Entry point for the CallOS savings calculator.

Usage:
    python main.py                   # launches the web app at localhost:5000
    python main.py --cli             # runs the terminal interface
    python main.py --cli --flat-month  # 4 weeks per month instead of 4.33
"""

import argparse

import config as cfg


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Kalkulator Oszczędności CallOS",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--flat-month",
        action="store_true",
        help=f"Count {cfg.WEEKS_PER_MONTH_FLAT} weeks per month "
             f"instead of {cfg.WEEKS_PER_MONTH} (terminal mode)",
    )
    args = parser.parse_args()

    if args.cli:
        from cli import run_cli
        wpm = cfg.WEEKS_PER_MONTH_FLAT if args.flat_month else cfg.WEEKS_PER_MONTH
        run_cli(weeks_per_month=wpm)
    else:
        from app import run_web
        run_web()


if __name__ == "__main__":
    main()
