"""核心轉檔模組"""

from wordbatch.core.converter import (
    ConversionOptions,
    ConversionResult,
    ConversionStatus,
    WordConverter,
)
from wordbatch.core.errors import ExitCode, SessionError, SourcePathMissingError
from wordbatch.core.formats import TargetFormat, resolve_format
from wordbatch.core.scanner import ConversionRequest, FileScanner
from wordbatch.core.timestamps import FileTimes
from wordbatch.core.validation import validate_source_path, validate_target_format
from wordbatch.core.config import BatchConfig, load_config, save_config
from wordbatch.core.word import WordSession

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "ConversionStatus",
    "WordConverter",
    "ExitCode",
    "SessionError",
    "SourcePathMissingError",
    "TargetFormat",
    "resolve_format",
    "ConversionRequest",
    "FileScanner",
    "FileTimes",
    "validate_source_path",
    "validate_target_format",
    "BatchConfig",
    "load_config",
    "save_config",
    "WordSession",
]
