"""CLI 入口模組"""

import time
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Iterable, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    MofNCompleteColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.tree import Tree

from wordbatch.core import (
    ConversionOptions,
    ConversionRequest,
    ExitCode,
    FileScanner,
    SessionError,
    SourcePathMissingError,
    TargetFormat,
    WordConverter,
    validate_source_path,
)
from wordbatch.core.config import BatchConfig, load_config, save_config
from wordbatch.core.converter import ConversionResult, ConversionStatus
from wordbatch.core.logging_config import setup_logging, get_logger
from wordbatch.core.paths import get_config_file, get_log_dir

app = typer.Typer(
    name="wordbatch",
    help="Word 批次轉檔工具 - 透過 Word 自動化將 .doc 轉為 .docx / PDF / XPS / HTML",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


console = Console(
    force_terminal=True,
    legacy_windows=False,
)
logger = get_logger(__name__)


SourceArgument = Annotated[
    str,
    typer.Argument(
        help="來源路徑：單一 Word 文件，或包含文件的資料夾（遞迴掃描）",
        show_default=False,
    ),
]
IncludeOption = Annotated[
    Optional[str],
    typer.Option(
        "--include", "-i",
        help="資料夾模式的檔名篩選（glob），預設為 *.doc",
        metavar="PATTERN",
        show_default=False,
    ),
]
FormatOption = Annotated[
    Optional[TargetFormat],
    typer.Option(
        "--format", "-f",
        help="輸出格式：Default (.docx), PDF, XPS, HTML",
        case_sensitive=False,
        show_default=False,
    ),
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config", "-c",
        help="設定檔路徑（JSON），預設為 config/wordbatch.json",
        dir_okay=False,
        show_default=False,
    ),
]


def _source_missing(error: str) -> typer.Exit:
    """回報來源路徑錯誤，返回對應的結束代碼"""
    logger.warning(error)
    console.print(f"[yellow]警告：{escape(error)}[/yellow]")
    return typer.Exit(int(ExitCode.SOURCE_MISSING))


def _create_scanner(source_path: str, include_filter: str) -> FileScanner:
    """驗證來源路徑並建立掃描器"""
    valid, error = validate_source_path(source_path)
    if not valid:
        raise _source_missing(error)

    try:
        return FileScanner(source_path, include_filter)
    except SourcePathMissingError as e:
        raise _source_missing(str(e)) from e


@app.command()
def convert(
    source_path: SourceArgument = "",
    include_filter: IncludeOption = None,
    target_format: FormatOption = None,
    delete_existing_files: Annotated[
        bool,
        typer.Option(
            "--delete-existing-files",
            help="轉檔前刪除已存在的輸出檔",
        ),
    ] = False,
    continue_on_error: Annotated[
        bool,
        typer.Option(
            "--continue-on-error",
            help="單一檔案失敗時繼續處理其餘檔案",
        ),
    ] = False,
    instance_per_file: Annotated[
        bool,
        typer.Option(
            "--instance-per-file",
            help="每個檔案各自啟動一個 Word（較慢但彼此隔離）",
        ),
    ] = False,
    reset_template: Annotated[
        bool,
        typer.Option(
            "--reset-template",
            help="另存前將文件重新附加到 Normal 範本",
        ),
    ] = False,
    delete_original: Annotated[
        bool,
        typer.Option(
            "--delete-original",
            help="轉檔成功後刪除原始檔",
        ),
    ] = False,
    visible: Annotated[
        bool,
        typer.Option(
            "--visible",
            help="顯示 Word 視窗（除錯用）",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run", "-n",
            help="預覽模式，只顯示將要轉檔的檔案",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="顯示詳細日誌",
        ),
    ] = False,
    config_file: ConfigOption = None,
) -> None:
    """
    批次轉換 Word 文件

    來源為資料夾時遞迴掃描符合篩選的檔案，為檔案時只轉換該檔案。
    輸出檔與來源位於同一目錄，並保留來源的建立/修改/存取時間。

    結束代碼：1001 無法啟動 Word、1002 來源路徑錯誤、1003 轉檔失敗。

    範例：
    - 轉為 .docx： wordbatch convert E:\\Temp
    - 轉為 PDF： wordbatch convert E:\\Temp -f PDF
    - 單一檔案： wordbatch convert E:\\Temp\\MyDocument.doc
    - 失敗時繼續： wordbatch convert E:\\Temp --continue-on-error
    """
    setup_logging(verbose=verbose, log_dir=get_log_dir(), console=console)
    config = load_config(config_file)

    include = include_filter or config.include_filter
    scanner = _create_scanner(source_path, include)

    fmt = target_format or TargetFormat.from_string(config.target_format)
    options = ConversionOptions(
        delete_existing_files=delete_existing_files or config.delete_existing_files,
        instance_per_file=instance_per_file or config.instance_per_file,
        reset_template=reset_template or config.reset_template,
        disable_auto_macros=config.disable_auto_macros,
        visible=visible or config.visible,
    )
    keep_going = continue_on_error or config.continue_on_error
    remove_original = delete_original or config.delete_original

    logger.info(f"開始批次轉檔：{scanner.source_path} -> {fmt.value}")
    mode = "單一檔案" if scanner.is_single_file else f"資料夾（{include}）"
    console.print(f"[bold blue]來源路徑：[/bold blue]{escape(str(scanner.source_path))}")
    console.print(f"[bold blue]模式：[/bold blue]{escape(mode)}")
    console.print(f"[bold blue]輸出格式：[/bold blue]{fmt.display_name}")

    requests = scanner.requests(fmt, delete_original=remove_original)

    if dry_run:
        tree = _build_requests_tree(requests, scanner.input_dir, "將要轉檔的檔案")
        console.print(tree)
        return

    _run_conversion(requests, options, continue_on_error=keep_going)


def _build_requests_tree(
    requests: Iterable[ConversionRequest],
    root_path: Path,
    title: str,
) -> Tree:
    """建立請求樹狀結構"""
    tree = Tree(f"[bold blue]{escape(title)}[/bold blue] (於 {escape(root_path.name)})")

    # 建立目錄節點的映射
    nodes: dict[Path, Tree] = {Path("."): tree}

    for request in requests:
        try:
            rel_path = request.source_path.parent.relative_to(root_path)
        except ValueError:
            rel_path = Path(".")

        # 確保所有父目錄節點都已建立
        current = Path(".")
        for part in rel_path.parts:
            parent = current
            current = current / part
            if current not in nodes:
                nodes[current] = nodes[parent].add(f"📁 [bold]{escape(part)}[/bold]")

        target = request.destination_path.name
        if request.is_same_path:
            status_tag = "[yellow]略過（路徑相同）[/yellow]"
        elif request.destination_path.exists():
            status_tag = "[yellow]輸出檔已存在[/yellow]"
        else:
            status_tag = "[green]待轉檔[/green]"
        label = f"{escape(request.source_path.name)} → [cyan]{escape(target)}[/cyan] {status_tag}"
        nodes[rel_path].add(label)

    return tree


def _run_conversion(
    requests: Iterable[ConversionRequest],
    options: ConversionOptions,
    continue_on_error: bool,
) -> None:
    """執行轉檔"""
    results: list[ConversionResult] = []

    start_time = time.perf_counter()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TextColumn("{task.fields[filename]}", style="cyan"),
        console=console,
        expand=True,
        transient=True,
    ) as progress:
        # 檔案為逐一掃描產生，總數未知
        task_id = progress.add_task(
            "[bold green]轉檔中...",
            total=None,
            filename="",
        )

        def on_progress(
            current: int,
            request: ConversionRequest,
            status: ConversionStatus | None,
        ) -> None:
            if status is not None:
                progress.update(task_id, advance=1, filename="", refresh=True)
            else:
                progress.update(task_id, filename=request.relative_source)

        try:
            with WordConverter(options) as converter:
                results = converter.convert_batch(
                    requests,
                    on_progress=on_progress,
                    continue_on_error=continue_on_error,
                )
        except SessionError as e:
            logger.error(f"無法取得 Word 工作階段：{e}")
            console.print(f"[red]錯誤：{escape(str(e))}[/red]")
            console.print("[yellow]請確認 Microsoft Word 已安裝並可正常啟動[/yellow]")
            raise typer.Exit(int(ExitCode.SESSION_FAILED))

    elapsed_time = time.perf_counter() - start_time

    if not continue_on_error and any(result.failed for result in results):
        failed = next(result for result in results if result.failed)
        console.print(
            f"[red]轉檔中止：{escape(str(failed.request.source_path))}：{escape(failed.message)}[/red]"
        )
        raise typer.Exit(int(ExitCode.CONVERSION_FAILED))

    console.print()
    console.print("[bold]轉檔完成！[/bold]")
    console.print(f"[blue]總耗時：{elapsed_time:.1f} 秒[/blue]")


@app.command()
def scan(
    source_path: SourceArgument = "",
    include_filter: IncludeOption = None,
    target_format: FormatOption = None,
    config_file: ConfigOption = None,
) -> None:
    """
    掃描並列出要轉檔的 Word 文件

    僅執行掃描動作，不會啟動 Word，以樹狀結構列出來源與輸出檔名。

    範例：
    - 簡易掃描： wordbatch scan E:\\Temp
    - 指定篩選： wordbatch scan E:\\Temp -i "*.rtf" -f PDF
    """
    config = load_config(config_file)
    scanner = _create_scanner(source_path, include_filter or config.include_filter)
    fmt = target_format or TargetFormat.from_string(config.target_format)

    with console.status("[bold green]掃描檔案中..."):
        requests = list(scanner.requests(fmt))

    tree = _build_requests_tree(requests, scanner.input_dir, f"找到 {len(requests)} 個檔案")
    console.print(tree)


@app.command("config")
def show_config(
    init: Annotated[
        bool,
        typer.Option(
            "--init",
            help="建立預設設定檔（已存在時不覆寫）",
        ),
    ] = False,
    config_file: ConfigOption = None,
) -> None:
    """
    顯示目前的預設設定

    設定檔中的值作為 convert 的預設值，命令列參數會覆寫設定檔。
    """
    path = config_file or get_config_file()

    if init:
        if path.exists():
            console.print(f"[yellow]設定檔已存在：{escape(str(path))}[/yellow]")
            raise typer.Exit(1)
        try:
            save_config(BatchConfig(), path)
        except OSError as e:
            console.print(f"[red]無法寫入設定檔：{escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]已建立設定檔：[/green]{escape(str(path))}")

    config = load_config(path)

    table = Table(title=f"設定（{escape(str(path))}）")
    table.add_column("項目", style="cyan")
    table.add_column("值", style="green")
    for key, value in asdict(config).items():
        table.add_row(key, str(value))
    console.print(table)


if __name__ == "__main__":
    app()
