"""日誌配置模組

提供統一的日誌配置功能，支援：
- Console 輸出（使用 RichHandler）
- 檔案輸出（每日輪替，保留 30 天）
- 自動 fallback 策略（處理權限問題）

每個失敗的檔案都會以 ERROR 層級記錄路徑與錯誤訊息，
批次結束後不另外產生摘要，操作者需從日誌得知哪些檔案失敗。
"""

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FILE_NAME = "wordbatch.log"
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _get_writable_log_dir(preferred_dir: Optional[Path]) -> Optional[Path]:
    """嘗試找到可寫入的日誌目錄

    依序嘗試以下路徑：
    1. preferred_dir（如果提供）
    2. 當前工作目錄的 logs/
    3. %LOCALAPPDATA%\\wordbatch\\logs（Windows）
    4. ~/.wordbatch/logs（跨平台 fallback）

    Returns:
        可寫入的路徑，若所有路徑都失敗則返回 None
    """
    candidates = []

    if preferred_dir:
        candidates.append(Path(preferred_dir))

    candidates.append(Path.cwd() / "logs")

    if os.name == 'nt':
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            candidates.append(Path(local_app_data) / "wordbatch" / "logs")

    candidates.append(Path.home() / ".wordbatch" / "logs")

    for path in candidates:
        try:
            path.mkdir(parents=True, exist_ok=True)

            # 測試寫入權限
            test_file = path / ".write_test"
            test_file.touch()
            test_file.unlink()

            return path
        except OSError:
            continue

    return None


def _build_file_handler(log_file: Path) -> TimedRotatingFileHandler:
    """建立每日輪替的檔案 handler（永遠記錄 DEBUG）"""
    handler = TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        interval=1,
        backupCount=30,
        encoding="utf-8",
        delay=True,  # 首次寫入時才建立檔案
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    verbose: bool = False,
    log_dir: Optional[Path | str] = None,
    console: Optional[Console] = None,
) -> Optional[Path]:
    """設定日誌系統

    Args:
        verbose: 是否啟用詳細模式（Console 顯示 DEBUG）
        log_dir: 日誌目錄路徑，None 表示僅使用 Console Handler
        console: 共用的 Console 實例（與 Progress 共用以避免輸出競爭）

    Returns:
        日誌檔案路徑，未啟用檔案日誌時為 None
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # 根層級設為 DEBUG，由 handler 決定實際輸出層級
    root_logger.setLevel(logging.DEBUG)

    console_handler = RichHandler(
        console=console if console is not None else Console(),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        level=logging.DEBUG if verbose else logging.INFO,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return None

    writable_dir = _get_writable_log_dir(Path(log_dir))
    if writable_dir is None:
        logging.warning("找不到可寫入的日誌目錄，僅使用 Console 輸出")
        return None

    log_file = writable_dir / LOG_FILE_NAME
    try:
        root_logger.addHandler(_build_file_handler(log_file))
    except OSError as e:
        logging.warning(f"無法建立檔案日誌：{e}，僅使用 Console 輸出")
        return None

    logging.debug(f"日誌檔案：{log_file}")
    return log_file


def get_logger(name: str) -> logging.Logger:
    """取得具名 logger

    Args:
        name: Logger 名稱（通常使用 __name__）
    """
    return logging.getLogger(name)
