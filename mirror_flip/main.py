"""Точка входа в приложение."""
from mirror_flip.app import MirrorFlipApp
from mirror_flip.config import load_config
from mirror_flip.utils.logging import setup_logging


def main() -> None:
    """Читает конфигурацию, настраивает логирование, создаёт и запускает главное окно."""
    config = load_config()
    setup_logging(level=config.log_level, log_file=config.log_file or None)
    app = MirrorFlipApp(config)
    app.mainloop()


if __name__ == "__main__":
    main()
