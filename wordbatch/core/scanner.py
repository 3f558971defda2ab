"""檔案掃描模組"""

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from wordbatch.core.errors import SourcePathMissingError
from wordbatch.core.formats import DEFAULT_INCLUDE_FILTER, TargetFormat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionRequest:
    """轉檔請求"""

    source_path: Path
    source_extension: str
    target_extension: str
    format_code: int
    delete_original: bool = False
    input_dir: Path | None = None

    @classmethod
    def create(
        cls,
        source_path: Path,
        target_format: TargetFormat,
        delete_original: bool = False,
        input_dir: Path | None = None,
    ) -> "ConversionRequest":
        """依輸出格式建立請求"""
        return cls(
            source_path=source_path,
            source_extension=source_path.suffix,
            target_extension=target_format.extension,
            format_code=target_format.format_code,
            delete_original=delete_original,
            input_dir=input_dir,
        )

    @property
    def destination_path(self) -> Path:
        """計算輸出檔案路徑

        以字串取代完整路徑中第一個出現的來源副檔名，
        若目錄名稱含有相同文字，會被優先取代。
        """
        if not self.source_extension:
            return self.source_path
        source = str(self.source_path)
        return Path(source.replace(self.source_extension, self.target_extension, 1))

    @property
    def is_same_path(self) -> bool:
        """輸出路徑是否與來源相同"""
        return self.destination_path == self.source_path

    @property
    def relative_source(self) -> str:
        """相對來源路徑（用於顯示）"""
        if self.input_dir:
            try:
                return str(self.source_path.relative_to(self.input_dir))
            except ValueError:
                pass
        return self.source_path.name

    def __str__(self) -> str:
        return f"{self.source_path.name} -> {self.destination_path.name}"


class FileScanner:
    """檔案掃描器

    來源可為單一檔案或目錄；目錄會遞迴掃描符合 include filter 的檔案。
    """

    def __init__(
        self,
        source_path: Path | str,
        include_filter: str = DEFAULT_INCLUDE_FILTER,
    ):
        """
        初始化掃描器

        Args:
            source_path: 來源檔案或目錄
            include_filter: 目錄模式下使用的 glob 篩選，預設為 "*.doc"

        Raises:
            SourcePathMissingError: 來源路徑為空或不存在
        """
        if not source_path or not str(source_path).strip():
            raise SourcePathMissingError("未指定來源路徑")

        self.source_path = Path(source_path).resolve()
        if not self.source_path.exists():
            raise SourcePathMissingError(f"來源路徑不存在: {self.source_path}")

        self.include_filter = include_filter or DEFAULT_INCLUDE_FILTER

    @property
    def is_single_file(self) -> bool:
        """來源是否為單一檔案"""
        return self.source_path.is_file()

    @property
    def input_dir(self) -> Path:
        """用於顯示相對路徑的根目錄"""
        return self.source_path.parent if self.is_single_file else self.source_path

    def scan(self) -> Iterator[Path]:
        """
        依序產生要轉檔的檔案

        單一檔案模式不套用 include filter。

        Yields:
            符合條件的檔案路徑
        """
        if self.is_single_file:
            yield self.source_path
            return

        for root, dirs, files in os.walk(self.source_path):
            # 固定走訪順序
            dirs.sort()
            root_path = Path(root)
            for filename in sorted(files):
                # 跳過 Word 暫存檔
                if filename.startswith("~$"):
                    continue

                if not fnmatch.fnmatch(filename, self.include_filter):
                    continue

                logger.debug(f"找到檔案：{root_path / filename}")
                yield root_path / filename

    def requests(
        self,
        target_format: TargetFormat,
        delete_original: bool = False,
    ) -> Iterator[ConversionRequest]:
        """
        產生轉檔請求

        Args:
            target_format: 輸出格式
            delete_original: 轉檔成功後是否刪除原始檔

        Yields:
            ConversionRequest
        """
        input_dir = self.input_dir
        for filepath in self.scan():
            yield ConversionRequest.create(
                filepath,
                target_format,
                delete_original=delete_original,
                input_dir=input_dir,
            )
