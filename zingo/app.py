"""
Application context.

Builds the store, board service and navigator from a Config and hands them
to a presentation layer as one object, so nothing depends on module-level
singletons.

Usage:
    python -m zingo                        # default ~/.zingo
    python -m zingo --config ./zingo.yaml  # custom config file
"""
import argparse
import logging
import sys
from typing import Optional

from .config import Config
from .errors import ConfigError
from .mutations import DEFAULT_COLUMN_TITLES
from .navigation import Navigator
from .service import BoardService
from .store import FileStore

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [zingo] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


class AppContext:
    """Everything a presentation layer needs, constructed explicitly."""

    def __init__(self, cfg: Optional[Config] = None):
        self.cfg = cfg or Config.load()
        self.store = FileStore(self.cfg.data_dir)
        self.service = BoardService(self.store, locale=self.cfg.default_locale)
        self.navigator = Navigator(self.store)
        # Board column titles follow the locale in the user's settings
        self.navigator.subscribe(self._sync_locale)
        settings = self.navigator.load_settings()
        logger.debug(
            f"Context ready: dir={self.store.directory} "
            f"locale={settings.locale} dark_theme={settings.dark_theme}"
        )

    def _sync_locale(self, navigator: Navigator) -> None:
        locale = navigator.locale
        if locale not in DEFAULT_COLUMN_TITLES:
            locale = self.cfg.default_locale
        self.service.locale = locale

    def apply_settings(self, folder_path: str, dark_theme: bool, locale: str) -> None:
        """Persist settings from the settings screen."""
        self.navigator.update_settings(folder_path, dark_theme, locale)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="zingo", description="Zingo board storage")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    args = parser.parse_args(argv)

    cfg = Config.load(args.config)
    try:
        configure_logging(cfg.level)
    except ConfigError as e:
        configure_logging(logging.INFO)
        logger.warning(f"{e}, using INFO")
    ctx = AppContext(cfg)

    workspaces = ctx.service.list_workspaces()
    print(f"{len(workspaces)} workspace(s) in {ctx.store.directory}")
    for w in workspaces:
        board = ctx.store.load_board(w.id)
        columns = len(board.columns) if board else 0
        print(f"  {w.create_date.isoformat()}  {w.title}  ({columns} columns)")
    return 0
