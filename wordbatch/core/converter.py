"""Word 轉檔核心"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Protocol

from wordbatch.core.scanner import ConversionRequest
from wordbatch.core.timestamps import FileTimes
from wordbatch.core.word import WordSession, describe_com_error

logger = logging.getLogger(__name__)


class ConversionStatus(Enum):
    """轉檔狀態"""

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    OPEN_FAILED = "open_failed"

    @property
    def is_failure(self) -> bool:
        """是否視為失敗（FAILED 與 OPEN_FAILED）"""
        return self in (ConversionStatus.FAILED, ConversionStatus.OPEN_FAILED)


@dataclass
class ConversionResult:
    """轉檔結果"""

    request: ConversionRequest
    status: ConversionStatus
    message: str = ""

    @property
    def failed(self) -> bool:
        return self.status.is_failure


@dataclass
class ConversionOptions:
    """轉檔選項"""

    delete_existing_files: bool = False
    instance_per_file: bool = False
    reset_template: bool = False
    disable_auto_macros: bool = True
    visible: bool = False


class DocumentSession(Protocol):
    """文件自動化工作階段介面（WordSession 實作）"""

    def connect(self) -> None: ...

    def disconnect(self) -> None: ...

    def open_document(self, path: Path, disable_auto_macros: bool = True) -> Any: ...

    def reset_template(self, document: Any) -> None: ...

    def save_as(self, document: Any, path: Path, format_code: int) -> None: ...

    def close_document(self, document: Any) -> None: ...


class ProgressCallback(Protocol):
    """進度回呼介面"""

    def __call__(
        self,
        current: int,
        request: ConversionRequest,
        status: ConversionStatus | None,
    ) -> None:
        """
        進度回呼

        Args:
            current: 目前處理到第幾個（1-based）
            request: 目前處理的請求
            status: 處理結果（None 表示尚未處理完）
        """
        ...


class WordConverter:
    """Word 轉檔器

    預設整個批次共用一個 Word 工作階段（進入 context manager 時啟動）；
    instance_per_file 模式下每個檔案各自啟動並結束一個工作階段。

    注意：所有 COM 操作必須在同一個執行緒中執行（STA 模式）。
    """

    def __init__(
        self,
        options: ConversionOptions | None = None,
        session_factory: Callable[..., DocumentSession] | None = None,
    ):
        """
        初始化轉檔器

        Args:
            options: 轉檔選項
            session_factory: 建立工作階段的函數，預設為 WordSession
        """
        self.options = options or ConversionOptions()
        self._session_factory = session_factory or WordSession
        self._session: DocumentSession | None = None

    def __enter__(self) -> "WordConverter":
        """Context manager 進入"""
        if not self.options.instance_per_file:
            self._session = self._acquire_session()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager 退出"""
        if self._session is not None:
            session, self._session = self._session, None
            session.disconnect()

    def _acquire_session(self) -> DocumentSession:
        """建立並連接工作階段

        Raises:
            SessionError: 無法啟動 Word（不重試）
        """
        session = self._session_factory(visible=self.options.visible)
        session.connect()
        return session

    def convert_single(self, request: ConversionRequest) -> ConversionResult:
        """
        轉換單一檔案

        Args:
            request: 轉檔請求

        Returns:
            轉檔結果

        Raises:
            SessionError: instance_per_file 模式下無法啟動 Word
        """
        source = request.source_path
        destination = request.destination_path

        if request.is_same_path:
            logger.warning(f"輸出路徑與來源相同，略過：{source}")
            return ConversionResult(
                request=request,
                status=ConversionStatus.SKIPPED,
                message="輸出路徑與來源相同",
            )

        logger.debug(f"開始轉檔：{source} -> {destination}")

        try:
            times = FileTimes.capture(source)
        except OSError as e:
            logger.error(f"無法讀取來源檔: {source}: {e}")
            return ConversionResult(
                request=request,
                status=ConversionStatus.OPEN_FAILED,
                message=f"無法讀取來源檔: {e}",
            )

        if self.options.instance_per_file:
            session = self._acquire_session()
        elif self._session is not None:
            session = self._session
        else:
            raise RuntimeError("尚未啟動 Word，請在 with WordConverter(...) 區塊內呼叫")

        try:
            result = self._save_document(session, request)
        finally:
            if self.options.instance_per_file:
                session.disconnect()

        if result.status is ConversionStatus.SUCCESS:
            result = self._finalize(request, times)
        return result

    def _save_document(
        self,
        session: DocumentSession,
        request: ConversionRequest,
    ) -> ConversionResult:
        """開啟、另存並關閉文件"""
        source = request.source_path
        destination = request.destination_path

        try:
            document = session.open_document(
                source,
                disable_auto_macros=self.options.disable_auto_macros,
            )
        except Exception as e:
            message = describe_com_error(e)
            logger.error(f"開啟失敗: {source}: {message}")
            return ConversionResult(
                request=request,
                status=ConversionStatus.OPEN_FAILED,
                message=f"無法開啟檔案: {message}",
            )

        if document is None:
            logger.error(f"開啟失敗: {source}")
            return ConversionResult(
                request=request,
                status=ConversionStatus.OPEN_FAILED,
                message=f"無法開啟檔案: {source}",
            )

        try:
            if self.options.reset_template:
                session.reset_template(document)
                logger.debug(f"已重設範本：{source}")

            if destination.exists():
                if self.options.delete_existing_files:
                    destination.unlink()
                    logger.debug(f"已刪除既有輸出檔：{destination}")
                else:
                    logger.debug(f"輸出檔已存在，交由 Word 覆寫：{destination}")

            session.save_as(document, destination, request.format_code)
        except Exception as e:
            message = describe_com_error(e)
            logger.error(f"轉檔失敗: {source}: {message}")
            return ConversionResult(
                request=request,
                status=ConversionStatus.FAILED,
                message=f"轉檔失敗: {message}",
            )
        finally:
            # 確保關閉文件
            try:
                session.close_document(document)
            except Exception as e:
                logger.warning(f"關閉文件時發生錯誤: {describe_com_error(e)}")

        return ConversionResult(
            request=request,
            status=ConversionStatus.SUCCESS,
            message="轉檔成功",
        )

    def _finalize(self, request: ConversionRequest, times: FileTimes) -> ConversionResult:
        """套用時間戳記並視需要刪除原始檔"""
        source = request.source_path
        destination = request.destination_path

        try:
            # 文件關閉後 Word 才會釋放輸出檔
            times.apply(destination)

            if request.delete_original and destination.exists():
                source.unlink()
                logger.debug(f"已刪除原始檔：{source}")
        except OSError as e:
            logger.error(f"轉檔後處理失敗: {source}: {e}")
            return ConversionResult(
                request=request,
                status=ConversionStatus.FAILED,
                message=f"轉檔後處理失敗: {e}",
            )

        logger.info(f"已轉檔: {request.relative_source} -> {destination.name}")
        return ConversionResult(
            request=request,
            status=ConversionStatus.SUCCESS,
            message="轉檔成功",
        )

    def convert_batch(
        self,
        requests: Iterable[ConversionRequest],
        on_progress: ProgressCallback | None = None,
        continue_on_error: bool = False,
    ) -> list[ConversionResult]:
        """
        批次轉檔

        依序處理每個請求；遇到失敗時預設立即停止。

        Args:
            requests: 轉檔請求（可為產生器）
            on_progress: 進度回呼函數
            continue_on_error: 失敗時是否繼續處理下一個檔案

        Returns:
            已處理的轉檔結果
        """
        results: list[ConversionResult] = []

        for idx, request in enumerate(requests, start=1):
            # 回報進度（開始處理）
            if on_progress:
                on_progress(idx, request, None)

            result = self.convert_single(request)
            results.append(result)

            # 回報進度（處理完成）
            if on_progress:
                on_progress(idx, request, result.status)

            if result.failed and not continue_on_error:
                logger.error("轉檔失敗，停止處理其餘檔案")
                break

        return results
