"""路徑與參數驗證模組

在建立 Word 工作階段之前檢查 CLI 參數。
"""

from pathlib import Path

from wordbatch.core.formats import TargetFormat


def validate_source_path(path: Path | str | None) -> tuple[bool, str]:
    """驗證來源路徑

    Args:
        path: 來源檔案或目錄

    Returns:
        (是否有效, 錯誤訊息)。有效時錯誤訊息為空字串。

    Examples:
        >>> valid, error = validate_source_path("")
        >>> valid
        False
    """
    if not path or not str(path).strip():
        return False, "請指定來源路徑 (source-path)"

    path = Path(path)

    if not path.exists():
        return False, f"來源路徑不存在：{path}"

    if not (path.is_file() or path.is_dir()):
        return False, f"來源路徑不是檔案或目錄：{path}"

    return True, ""


def validate_target_format(name: str | None) -> tuple[bool, str]:
    """驗證輸出格式名稱

    Args:
        name: 格式名稱

    Returns:
        (是否有效, 錯誤訊息)。有效時錯誤訊息為空字串。
    """
    if not name:
        return False, "請指定輸出格式"

    try:
        TargetFormat.from_string(name)
    except ValueError as e:
        return False, str(e)

    return True, ""
