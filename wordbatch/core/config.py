"""批次轉檔設定管理模組

提供預設值設定檔的儲存與載入功能，CLI 參數會覆寫設定檔內容。
"""

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from wordbatch.core.formats import DEFAULT_INCLUDE_FILTER, TargetFormat
from wordbatch.core.paths import get_config_file
from wordbatch.core.validation import validate_target_format

logger = logging.getLogger(__name__)


@dataclass
class BatchConfig:
    """批次轉檔設定資料類別"""

    include_filter: str = DEFAULT_INCLUDE_FILTER
    target_format: str = TargetFormat.DEFAULT.value
    delete_existing_files: bool = False
    continue_on_error: bool = False
    instance_per_file: bool = False
    reset_template: bool = False
    delete_original: bool = False
    disable_auto_macros: bool = True
    visible: bool = False


def get_default_config() -> BatchConfig:
    """取得預設設定

    Returns:
        BatchConfig: 預設設定值
    """
    return BatchConfig()


def load_config(config_file: Path | None = None) -> BatchConfig:
    """載入設定

    從設定檔載入設定，如果檔案不存在或損壞則返回預設值。
    個別欄位型別錯誤時，該欄位使用預設值。

    Args:
        config_file: 設定檔路徑，None 表示使用預設位置

    Returns:
        BatchConfig: 載入的設定或預設設定
    """
    if config_file is None:
        config_file = get_config_file()

    if not config_file.exists():
        logger.debug(f"設定檔不存在，使用預設值：{config_file}")
        return get_default_config()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"設定檔 JSON 解析失敗: {e}，使用預設值")
        return get_default_config()
    except OSError as e:
        logger.error(f"讀取設定檔時發生錯誤: {e}，使用預設值")
        return get_default_config()

    if not isinstance(data, dict):
        logger.warning("設定檔格式錯誤（應為 JSON 物件），使用預設值")
        return get_default_config()

    config = get_default_config()

    if "include_filter" in data and isinstance(data["include_filter"], str):
        if data["include_filter"].strip():
            config.include_filter = data["include_filter"]

    if "target_format" in data and isinstance(data["target_format"], str):
        valid, error = validate_target_format(data["target_format"])
        if valid:
            config.target_format = TargetFormat.from_string(data["target_format"]).value
        else:
            logger.warning(f"無效的 target_format: {error}，使用預設值")

    # 布林欄位
    for field in fields(BatchConfig):
        if field.type not in (bool, "bool"):
            continue
        if field.name not in data:
            continue
        value = data[field.name]
        if isinstance(value, bool):
            setattr(config, field.name, value)
        else:
            logger.warning(f"無效的 {field.name}: {value!r}，使用預設值")

    logger.debug(f"成功載入設定: {config}")
    return config


def save_config(config: BatchConfig, config_file: Path | None = None) -> Path:
    """儲存設定

    將設定儲存為 JSON 檔案。

    Args:
        config: 要儲存的設定
        config_file: 設定檔路徑，None 表示使用預設位置

    Returns:
        寫入的設定檔路徑
    """
    if config_file is None:
        config_file = get_config_file()

    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(asdict(config), f, ensure_ascii=False, indent=2)

    logger.debug(f"成功儲存設定: {config_file}")
    return config_file
