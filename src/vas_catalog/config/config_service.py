# ⚙️ vas_catalog/config/config_service.py
"""
⚙️ config_service.py — Сервіс доступу до статичної конфігурації движка.

🔹 Клас `ConfigService`:
- Обʼєднує .env/змінні середовища, вбудований config.yaml, опційний YAML-оверрайд та in-code overrides.
- Надає єдиний метод .get() з крапковими ключами й опційним кастом типу.
- Кожен екземпляр незалежний, тому тести та кілька движків не ділять стан.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import copy                                 # 🧬 Глибокі копії вузлів
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Callable, Dict, Mapping, Optional, Union

# 🧩 Внутрішні модулі проєкту
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"
CONFIG_PATH_ENV = "VAS_CATALOG_CONFIG"


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних конфігураційних параметрів.
    Пріоритет (від слабшого до сильнішого): config.yaml → файл-оверрайд → змінні середовища → overrides.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
        load_env: bool = True,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._config: Dict[str, Any] = {}
        self._load_all_configs(config_path, overrides, load_env, environ)

    def _load_all_configs(
        self,
        config_path: Optional[Union[str, Path]],
        overrides: Optional[Mapping[str, Any]],
        load_env: bool,
        environ: Optional[Mapping[str, str]],
    ) -> None:
        """📥 Завантажує всі джерела конфігурації в один словник."""

        # --- 1. Вбудований YAML ---
        self._deep_update(self._config, self._read_yaml(DEFAULT_CONFIG_PATH))

        # --- 2. Файл-оверрайд ---
        if load_env:
            load_dotenv()                       # 🔐 Ініціалізує змінні середовища з файлу .env
        env = os.environ if environ is None else environ
        override_path = config_path or env.get(CONFIG_PATH_ENV)
        if override_path:
            self._deep_update(self._config, self._read_yaml(Path(override_path)))

        # --- 3. Змінні середовища провайдерів ---
        self._deep_update(self._config, self._unflatten_dict(self._provider_env(env)))

        # --- 4. Явні overrides (тести, CLI) ---
        if overrides:
            self._deep_update(self._config, self._unflatten_dict(dict(overrides)))

        logger.info("✅ Конфігурацію успішно завантажено.")
        logger.debug("🔍 Провайдери в конфігу: %s", list((self._config.get("providers") or {}).keys()))

    def get(self, key: str, default: Any = None, cast: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'menu.max_featured').

        Args:
            key: Ключ у форматі з крапкою.
            default: Значення за замовчуванням, якщо ключ не знайдено.
            cast: Опційний конвертер типу (int, float, dict...). Якщо каст не вдався — повертається default.
        """
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]                 # 🔎 Переходимо глибше в структуру
            else:
                return default
        if cast is None or value is None:
            return value
        try:
            return cast(value)
        except (TypeError, ValueError):
            logger.warning("⚠️ Не вдалося привести '%s'=%r через %s", key, value, getattr(cast, "__name__", cast))
            return default

    def section(self, key: str) -> Dict[str, Any]:
        """📦 Повертає копію вкладеного вузла (або порожній словник)."""
        node = self.get(key, {})
        return copy.deepcopy(node) if isinstance(node, dict) else {}

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ
    # ===============================
    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("⚠️ YAML-конфіг не знайдено: %s", path)
            return {}
        except yaml.YAMLError as e:
            logger.warning("⚠️ Не вдалося розібрати %s: %s", path, e)
            return {}
        if not isinstance(loaded, dict):
            logger.warning("⚠️ Корінь %s має бути словником, отримано %s", path, type(loaded).__name__)
            return {}
        return loaded

    def _provider_env(self, env: Mapping[str, str]) -> Dict[str, Any]:
        """
        🔐 Читає `<ID>_API_URL`, `<ID>_API_KEY`, `<ID>_SECRET` для кожного провайдера з YAML.
        """
        flat: Dict[str, Any] = {}
        for provider_id in (self._config.get("providers") or {}):
            prefix = str(provider_id).upper()
            for env_suffix, field in (("API_URL", "base_url"), ("API_KEY", "api_key"), ("SECRET", "secret")):
                value = env.get(f"{prefix}_{env_suffix}")
                if value:
                    flat[f"providers.{provider_id}.{field}"] = value
        return flat

    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """🔁 'menu.max_featured' → {'menu': {'max_featured': ...}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Mapping[str, Any]) -> None:
        """🔁 Рекурсивно обʼєднує два словники."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = copy.deepcopy(value)


__all__ = ["ConfigService", "DEFAULT_CONFIG_PATH", "CONFIG_PATH_ENV"]
