"""檔案時間戳記保留模組

轉檔前擷取來源檔的建立/修改/存取時間，轉檔後套用到輸出檔。
時間一律以整數奈秒保存，避免浮點數秒造成的次微秒誤差。
建立時間只有在 Windows 上能寫回。
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# 1601-01-01 與 1970-01-01 之間的 100ns 刻度數
FILETIME_EPOCH_OFFSET = 116444736000000000


@dataclass(frozen=True)
class FileTimes:
    """檔案時間戳記（奈秒，epoch）"""

    created_ns: int
    modified_ns: int
    accessed_ns: int

    @classmethod
    def capture(cls, path: Path) -> "FileTimes":
        """讀取檔案時間戳記"""
        st = path.stat()
        # st_birthtime_ns 在 3.12+ 的 Windows 可用；Windows 的 st_ctime_ns 亦為建立時間
        created_ns = getattr(st, "st_birthtime_ns", st.st_ctime_ns)
        return cls(
            created_ns=created_ns,
            modified_ns=st.st_mtime_ns,
            accessed_ns=st.st_atime_ns,
        )

    def apply(self, path: Path) -> None:
        """將時間戳記寫入檔案

        Raises:
            OSError: 無法寫入時間戳記
        """
        if sys.platform == "win32":
            _set_windows_creation_time(path, self.created_ns)
        else:
            logger.debug(f"非 Windows 平台，略過建立時間：{path}")
        os.utime(path, ns=(self.accessed_ns, self.modified_ns))


def ns_to_filetime(ns: int) -> int:
    """epoch 奈秒轉為 Windows FILETIME（100ns 刻度）"""
    return ns // 100 + FILETIME_EPOCH_OFFSET


def _set_windows_creation_time(path: Path, created_ns: int) -> None:
    """設定建立時間

    pywintypes.Time 只到微秒，因此直接以 FILETIME 呼叫 kernel32.SetFileTime；
    存取/修改時間交由 os.utime 處理。
    """
    import ctypes
    from ctypes import wintypes

    import pywintypes
    import win32con
    import win32file

    ticks = ns_to_filetime(created_ns)
    filetime = wintypes.FILETIME(ticks & 0xFFFFFFFF, ticks >> 32)

    try:
        handle = win32file.CreateFile(
            str(path),
            win32con.GENERIC_WRITE,
            win32con.FILE_SHARE_READ | win32con.FILE_SHARE_WRITE,
            None,
            win32con.OPEN_EXISTING,
            win32con.FILE_ATTRIBUTE_NORMAL,
            None,
        )
    except pywintypes.error as e:
        raise OSError(f"無法開啟檔案以設定時間戳記: {path} ({e.strerror})") from e

    try:
        set_file_time = ctypes.windll.kernel32.SetFileTime
        set_file_time.argtypes = (
            wintypes.HANDLE,
            ctypes.POINTER(wintypes.FILETIME),
            ctypes.POINTER(wintypes.FILETIME),
            ctypes.POINTER(wintypes.FILETIME),
        )
        set_file_time.restype = wintypes.BOOL
        if not set_file_time(int(handle), ctypes.byref(filetime), None, None):
            raise ctypes.WinError()
    finally:
        handle.Close()
