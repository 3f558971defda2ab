"""Word COM 自動化工作階段"""

import gc
import logging
from pathlib import Path
from typing import Any

from wordbatch.core.errors import SessionError

logger = logging.getLogger(__name__)

# WdAlertLevel
WD_ALERTS_NONE = 0
# WdSaveOptions
WD_DO_NOT_SAVE_CHANGES = 0
# MsoAutomationSecurity
MSO_AUTOMATION_SECURITY_LOW = 1
MSO_AUTOMATION_SECURITY_FORCE_DISABLE = 3


def describe_com_error(error: Exception) -> str:
    """取得 COM 錯誤的說明文字

    pywintypes.com_error 的 excepinfo[2] 是 Word 提供的錯誤描述。
    """
    args = getattr(error, "args", ())
    if len(args) >= 3 and isinstance(args[2], tuple) and len(args[2]) >= 3 and args[2][2]:
        return str(args[2][2]).strip()
    if len(args) >= 2 and isinstance(args[1], str):
        return args[1]
    return str(error)


class WordSession:
    """Word 自動化工作階段

    注意：所有 COM 操作必須在同一個執行緒中執行（STA 模式）。
    每個工作階段使用 DispatchEx 啟動獨立的 Word 程序，
    結束時必須呼叫 disconnect() 以避免殘留 WINWORD.EXE。
    """

    def __init__(self, visible: bool = False):
        """
        初始化工作階段

        Args:
            visible: 是否顯示 Word 視窗
        """
        self.visible = visible
        self._word = None

    def __enter__(self) -> "WordSession":
        """Context manager 進入"""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager 退出"""
        self.disconnect()

    @property
    def connected(self) -> bool:
        return self._word is not None

    def connect(self) -> None:
        """啟動 Word COM

        Raises:
            SessionError: Word 未安裝或 COM 啟動失敗
        """
        if self._word is not None:
            return

        try:
            import pythoncom
            import win32com.client
        except ImportError as e:
            raise SessionError(f"無法載入 pywin32: {e}") from e

        # 確保 COM 已初始化（對於背景執行緒很重要）
        pythoncom.CoInitialize()
        try:
            word = win32com.client.DispatchEx("Word.Application")
            word.Visible = self.visible
            word.DisplayAlerts = WD_ALERTS_NONE
            logger.debug(f"Word 版本：{word.Version}")
        except Exception as e:
            pythoncom.CoUninitialize()
            raise SessionError(f"無法啟動 Word: {describe_com_error(e)}") from e

        self._word = word
        logger.info(f"已啟動 Word COM (Visible={self.visible})")

    def disconnect(self) -> None:
        """結束 Word 並釋放 COM 參考"""
        if self._word is None:
            return

        import pythoncom

        try:
            self._word.Quit(WD_DO_NOT_SAVE_CHANGES)
        except Exception as e:
            logger.warning(f"結束 Word 時發生錯誤: {describe_com_error(e)}")
        finally:
            self._word = None
            # COM 物件是原生參考計數，強制回收確保 Word 程序釋放
            gc.collect()
            pythoncom.CoUninitialize()
            logger.info("已結束 Word COM")

    def _require_word(self) -> Any:
        if self._word is None:
            raise RuntimeError("尚未啟動 Word，請先呼叫 connect()")
        return self._word

    def open_document(self, path: Path, disable_auto_macros: bool = True) -> Any:
        """開啟文件

        Args:
            path: 文件路徑
            disable_auto_macros: 是否停用自動執行巨集（AutoOpen 等）

        Returns:
            Word Document COM 物件
        """
        word = self._require_word()
        word.AutomationSecurity = (
            MSO_AUTOMATION_SECURITY_FORCE_DISABLE
            if disable_auto_macros
            else MSO_AUTOMATION_SECURITY_LOW
        )
        return word.Documents.Open(
            FileName=str(path),
            ConfirmConversions=False,
            ReadOnly=True,
            AddToRecentFiles=False,
            Visible=self.visible,
        )

    def reset_template(self, document: Any) -> None:
        """將文件重新附加到 Normal 範本"""
        word = self._require_word()
        document.AttachedTemplate = word.NormalTemplate.FullName

    def save_as(self, document: Any, path: Path, format_code: int) -> None:
        """另存新檔

        Args:
            document: Word Document COM 物件
            path: 輸出路徑
            format_code: WdSaveFormat 代碼
        """
        try:
            document.SaveAs2(FileName=str(path), FileFormat=format_code)
        except AttributeError:
            # Word 2007 以前沒有 SaveAs2，fallback 到 SaveAs
            document.SaveAs(FileName=str(path), FileFormat=format_code)

    def close_document(self, document: Any) -> None:
        """關閉文件（不儲存變更）"""
        document.Close(WD_DO_NOT_SAVE_CHANGES)
