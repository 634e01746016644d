"""
Пакет boxcode
=============

Штрихкоды Code 128 и QR-коды в виде псевдографики для терминала.

Этот пакет предоставляет:
    - Кодирование текста в Code 128 (наборы A и B) с контрольной суммой mod 103
    - Рендеринг битовых матриц блочными символами Unicode (квадранты 2x2, секстанты 2x3)
    - Готовые к печати штрихкоды с тихими зонами
    - QR-коды и изображения Pillow как источники матриц

Пример базового использования:
    >>> from src import printable_barcode, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> art = printable_barcode("Wikipedia", height=2)
    >>> logger.info("Сгенерировано %d строк", art.count("\\n"))

Управление конфигурацией:
    >>> import os
    >>> os.environ['BOXCODE_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from src import load_config
    >>> config = load_config()
    >>> config['height']
    4

Версия: 0.1.0
Лицензия: MIT
Python: 3.11+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "boxcode Development Team"
__description__ = "Code 128 and QR barcodes rendered as Unicode box art for terminals"
__license__ = "MIT"
__python_requires__ = ">=3.11"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# Логгер пакета; модули используют logging.getLogger(__name__)
LOGGER_NAMESPACE = __name__

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

_LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета (LOGGER_NAMESPACE) с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная
      окружения BOXCODE_LOG_FILE

    Уровень логирования задаётся переменной окружения
    BOXCODE_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Идемпотентна - повторные вызовы не имеют эффекта.
    """
    log_level_str = os.environ.get("BOXCODE_LOG_LEVEL", "INFO").upper()
    log_level = _LOG_LEVELS.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Консольный обработчик (stderr) - WARNING и выше
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = os.environ.get("BOXCODE_LOG_FILE")
    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. "
                "Используется только консоль.",
                e,
            )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер пакета для указанного модуля.

    Логгеры именуются как "<пакет>.<module_name>" и наследуют обработчики
    логгера пакета.

    Аргументы:
        module_name: Имя модуля, обычно `__name__`.

    Возвращает:
        Экземпляр logging.Logger.

    Пример:
        >>> get_logger("barcodegen").name
        'src.barcodegen'
    """
    if module_name.startswith(LOGGER_NAMESPACE):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{LOGGER_NAMESPACE}.main")
    clean_name = module_name.lstrip(".")
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{clean_name}")


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "code_set": "B",
    "height": 4,
    "inverse": True,
    "lines_per_char": 2,
    "qr_border": 4,
    "log_level": "INFO",
}

_ENV_OVERRIDES: Dict[str, str] = {
    "BOXCODE_CODE_SET": "code_set",
    "BOXCODE_HEIGHT": "height",
    "BOXCODE_INVERSE": "inverse",
    "BOXCODE_LOG_LEVEL": "log_level",
}


def _env_value(key: str, raw: str) -> Any:
    if key == "height":
        return int(raw)
    if key == "inverse":
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if key == "log_level":
        return raw.strip().upper()
    return raw


def _apply_log_level(level_name: Any) -> None:
    """Установить уровень логгера пакета и файловых обработчиков из конфигурации."""
    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    level = _LOG_LEVELS.get(str(level_name).upper())
    if level is None:
        root_logger.warning("Игнорируется недопустимый уровень логирования %r", level_name)
        return
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.setLevel(level)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить настройки по умолчанию для рендеринга.

    Порядок слияния: значения по умолчанию, затем JSON-файл (только если
    путь передан явно), затем переменные окружения BOXCODE_CODE_SET,
    BOXCODE_HEIGHT, BOXCODE_INVERSE, BOXCODE_LOG_LEVEL.

    Итоговый log_level применяется к логгеру пакета. Остальные ключи
    читает TextBarcode.from_config().

    Ошибки чтения или разбора файла не прерывают работу: пишется
    предупреждение и используются значения по умолчанию.

    Аргументы:
        config_path: Путь к JSON-файлу с объектом настроек.

    Возвращает:
        Словарь со всеми ключами по умолчанию.
    """
    logger = get_logger(__name__)
    config = _DEFAULT_CONFIG.copy()

    if config_path is not None:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)
            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Файл конфигурации должен содержать JSON-объект, "
                    f"получен {type(user_config).__name__}"
                )
            config.update(user_config)
            logger.info("Конфигурация загружена из %s", config_path)
        except json.JSONDecodeError as e:
            logger.warning(
                "Не удалось разобрать %s: недопустимый JSON в строке %d, столбце %d. "
                "Используется конфигурация по умолчанию.",
                config_path,
                e.lineno,
                e.colno,
            )
        except OSError as e:
            logger.warning(
                "Не удалось прочитать %s: %s. Используется конфигурация по умолчанию.",
                config_path,
                e,
            )
        except ValueError as e:
            logger.warning(
                "Недопустимый формат конфигурации: %s. Используется конфигурация по умолчанию.",
                e,
            )

    for env_name, key in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None:
            continue
        try:
            config[key] = _env_value(key, raw)
        except ValueError:
            logger.warning("Игнорируется недопустимое значение %s=%r", env_name, raw)

    _apply_log_level(config["log_level"])
    logger.debug("Конфигурация: %s", config)
    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить, установлены ли зависимости.

    Возвращает:
        Словарь: имя пакета -> доступность (pillow, qrcode).
    """
    dependencies: Dict[str, bool] = {}

    try:
        import PIL  # noqa: F401

        dependencies["pillow"] = True
    except ImportError:
        dependencies["pillow"] = False

    try:
        import qrcode  # noqa: F401

        dependencies["qrcode"] = True
    except ImportError:
        dependencies["qrcode"] = False

    return dependencies


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

_setup_logging()

from src.barcodegen import (  # noqa: E402
    BarcodeGenError,
    Bitstream,
    InvalidConfiguration,
    RenderConfig,
    UnsupportedCharacter,
    decode_text,
    encode_symbols,
    printable_barcode,
    printable_qr,
    render_box_art,
)
from src.model.enums import CodeSet, Matrix2DCodeType  # noqa: E402

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "check_dependencies",
    # Кодирование и рендеринг
    "Bitstream",
    "CodeSet",
    "Matrix2DCodeType",
    "RenderConfig",
    "encode_symbols",
    "decode_text",
    "render_box_art",
    "printable_barcode",
    "printable_qr",
    # Исключения
    "BarcodeGenError",
    "InvalidConfiguration",
    "UnsupportedCharacter",
]

_logger = get_logger(__name__)
_logger.debug("boxcode v%s инициализирован", __version__)
