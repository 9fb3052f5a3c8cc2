"""Application entry point for the expense tracker backend."""

from expensetracker.app import App
from expensetracker.config import Config
from expensetracker.logging import setup_logging
from expensetracker.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
