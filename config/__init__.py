from __future__ import annotations

import importlib
import logging
import os


def get_settings_module() -> str:
    # Chọn module cấu hình theo biến APP_ENV, mặc định là 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def validate_settings(settings) -> None:
    """Kiểm tra các giá trị cấu hình mà bộ tính giờ công phụ thuộc vào."""
    hours = float(getattr(settings, "REQUIRED_REGULAR_HOURS", 8))
    # Giờ công chuẩn trong ngày phải nằm trong (0, 24]
    if not 0 < hours <= 24:
        raise ValueError(f"REQUIRED_REGULAR_HOURS không hợp lệ: {hours} (phải trong khoảng 0-24)")

    level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"LOG_LEVEL không hợp lệ: {level}")

    db_config = getattr(settings, "DB_CONFIG", None)
    if not isinstance(db_config, dict) or not db_config.get("database"):
        raise ValueError("DB_CONFIG thiếu tên database")


def load_settings(module_name: str | None = None):
    settings = importlib.import_module(module_name or get_settings_module())
    validate_settings(settings)
    return settings
