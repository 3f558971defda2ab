"""路徑處理輔助模組

提供統一的路徑處理函數，支援開發模式與打包後執行。
"""

import os
import sys
from pathlib import Path


def _app_data_dir(name: str) -> Path:
    """取得使用者目錄下的應用程式資料夾"""
    local_app_data = os.environ.get('LOCALAPPDATA')
    if local_app_data:
        return Path(local_app_data) / 'wordbatch' / name
    return Path.home() / '.wordbatch' / name


def get_log_dir() -> Path:
    """取得日誌目錄（支援打包後執行與權限問題）

    打包後使用 Windows 用戶目錄，避免權限問題。
    開發模式使用當前目錄。

    Returns:
        Path: 日誌目錄路徑
    """
    if getattr(sys, 'frozen', False):
        log_dir = _app_data_dir('logs')
    else:
        log_dir = Path.cwd() / 'logs'

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_config_dir() -> Path:
    """取得設定目錄

    Returns:
        Path: 設定目錄路徑
    """
    if getattr(sys, 'frozen', False):
        config_dir = _app_data_dir('config')
    else:
        config_dir = Path.cwd() / 'config'

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file() -> Path:
    """取得預設設定檔路徑"""
    return get_config_dir() / 'wordbatch.json'
