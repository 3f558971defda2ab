"""錯誤類型與結束代碼"""

from enum import IntEnum


class ExitCode(IntEnum):
    """CLI 結束代碼"""

    SUCCESS = 0
    SESSION_FAILED = 1001  # 無法啟動 Word
    SOURCE_MISSING = 1002  # 來源路徑為空或不存在
    CONVERSION_FAILED = 1003  # 文件轉檔失敗（未設定 continue-on-error）


class SourcePathMissingError(ValueError):
    """來源路徑為空或不存在"""


class SessionError(RuntimeError):
    """無法取得 Word 自動化工作階段"""
