import logging
import signal
import sys

from app_config import AppConfigurationError, load_app_config
from commands import CommandInterpreter
from notifier import NotifierConfigurationError, build_notifier
from runtime import RuntimeBootstrap, RuntimeEngine
from storage import SetStore, StateStore


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("timer_app")


def setup_signal_handlers() -> None:
    """Turn SIGTERM into the same graceful shutdown as Ctrl+C."""

    def signal_handler(signum: int, frame) -> None:
        raise KeyboardInterrupt(signal.Signals(signum).name)

    signal.signal(signal.SIGTERM, signal_handler)


def main() -> int:
    """Run the terminal timer board."""
    logger = setup_logging(level=logging.INFO)

    try:
        app_config = load_app_config()
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1

    logging.getLogger().setLevel(app_config.logging.level)
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)
    else:
        logger.info("No config.toml found, using defaults")

    state_store = StateStore(app_config.state.path, logger=logging.getLogger("storage.state"))
    set_store = SetStore(app_config.state.sets_dir, logger=logging.getLogger("storage.sets"))
    configuration = state_store.load()

    try:
        notifier = build_notifier(app_config.notifier, logger=logging.getLogger("notifier"))
    except NotifierConfigurationError as error:
        logger.error(f"Notifier configuration error: {error}")
        return 1

    interpreter = CommandInterpreter(
        state_store=state_store,
        set_store=set_store,
        logger=logging.getLogger("commands"),
    )
    setup_signal_handlers()
    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logger,
            app_config=app_config,
            configuration=configuration,
            interpreter=interpreter,
            state_store=state_store,
            notifier=notifier,
        )
    )
    return engine.run()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
