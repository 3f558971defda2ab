"""輸出格式定義"""

from __future__ import annotations

from enum import Enum


# Word WdSaveFormat 常數
WD_FORMAT_DOCUMENT = 0
WD_FORMAT_TEMPLATE = 1
WD_FORMAT_TEXT = 2
WD_FORMAT_RTF = 6
WD_FORMAT_HTML = 8
WD_FORMAT_FILTERED_HTML = 10
WD_FORMAT_XML_DOCUMENT = 12
WD_FORMAT_DOCUMENT_DEFAULT = 16
WD_FORMAT_PDF = 17
WD_FORMAT_XPS = 18
WD_FORMAT_OPEN_DOCUMENT_TEXT = 23

# 預設掃描的檔案類型
DEFAULT_INCLUDE_FILTER = "*.doc"


class TargetFormat(Enum):
    """支援的輸出格式"""

    DEFAULT = "Default"
    PDF = "PDF"
    XPS = "XPS"
    HTML = "HTML"

    @property
    def extension(self) -> str:
        """取得副檔名（含點號）"""
        return _FORMAT_TABLE[self][1]

    @property
    def format_code(self) -> int:
        """Word SaveAs 使用的 WdSaveFormat 代碼"""
        return _FORMAT_TABLE[self][0]

    @property
    def display_name(self) -> str:
        """顯示名稱"""
        names = {
            TargetFormat.DEFAULT: "Word 文件 (.docx)",
            TargetFormat.PDF: "PDF (Portable Document Format)",
            TargetFormat.XPS: "XPS (XML Paper Specification)",
            TargetFormat.HTML: "HTML (網頁)",
        }
        return names.get(self, self.value)

    @classmethod
    def from_string(cls, value: str) -> "TargetFormat":
        """從字串轉換為 TargetFormat（不分大小寫）"""
        normalized = value.strip().lower()
        for fmt in cls:
            if fmt.value.lower() == normalized:
                return fmt
        supported = ", ".join(fmt.value for fmt in cls)
        raise ValueError(f"不支援的格式: {value}，支援的格式: {supported}")


_FORMAT_TABLE: dict[TargetFormat, tuple[int, str]] = {
    TargetFormat.DEFAULT: (WD_FORMAT_DOCUMENT_DEFAULT, ".docx"),
    TargetFormat.PDF: (WD_FORMAT_PDF, ".pdf"),
    TargetFormat.XPS: (WD_FORMAT_XPS, ".xps"),
    TargetFormat.HTML: (WD_FORMAT_HTML, ".html"),
}


def resolve_format(name: str) -> tuple[str, int]:
    """解析格式名稱

    Args:
        name: 格式名稱，如 "Default", "PDF", "XPS", "HTML"

    Returns:
        (副檔名, WdSaveFormat 代碼)

    Raises:
        ValueError: 不支援的格式

    Examples:
        >>> resolve_format("PDF")
        ('.pdf', 17)
        >>> resolve_format("default")
        ('.docx', 16)
    """
    fmt = TargetFormat.from_string(name)
    return fmt.extension, fmt.format_code
