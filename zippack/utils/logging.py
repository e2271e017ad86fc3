"""
日志工具 - 统一输出门面

终端输出走 Rich Console，可选的日志文件写带完整日期的纯文本行。
每条消息可以带一个阶段标记，对应发布流程中的一步。
"""

import atexit
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO, Union

from rich.console import Console


class OutputLevel:
    """输出级别"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogStage:
    """发布流程阶段标记"""
    RELEASE = "RELEASE"
    SCAN = "SCAN"
    PLIST = "PLIST"
    NOTICES = "NOTICES"
    STRIP = "STRIP"
    HASH = "HASH"
    ARCHIVE = "ARCHIVE"
    MOVE = "MOVE"
    DONE = "DONE"


# 级别 -> (优先级, 终端样式)；SUCCESS 与 INFO 同级
_LEVELS = {
    OutputLevel.DEBUG: (10, "dim"),
    OutputLevel.INFO: (20, "default"),
    OutputLevel.SUCCESS: (20, "green"),
    OutputLevel.WARNING: (30, "yellow"),
    OutputLevel.ERROR: (40, "red bold"),
}


def format_line(message: str, level: str, stage: Optional[str] = None,
                when: Optional[datetime] = None) -> str:
    """日志文件中的一行: [日期 时间] [级别] [阶段] 消息"""
    when = when or datetime.now()
    parts = [f"[{when:%Y-%m-%d %H:%M:%S}]", f"[{level}]"]
    if stage:
        parts.append(f"[{stage}]")
    parts.append(message)
    return " ".join(parts)


class OutputFacade:
    """输出门面

    stream / error_stream 为 None 时每次输出都取当前的 sys.stdout / sys.stderr。
    ERROR 级别写到 error_stream，其余写到 stream。
    """

    def __init__(self, stream: Optional[TextIO] = None, error_stream: Optional[TextIO] = None):
        self._lock = threading.RLock()
        self._level = OutputLevel.INFO
        self._log_file: Optional[TextIO] = None
        self._console = Console(file=stream, highlight=False)
        self._error_console = Console(file=error_stream, stderr=True, highlight=False)

    def _enabled(self, level: str) -> bool:
        return _LEVELS[level][0] >= _LEVELS[self._level][0]

    def _emit(self, message: str, level: str, stage: Optional[str] = None):
        if not self._enabled(level):
            return

        now = datetime.now()
        console = self._error_console if level == OutputLevel.ERROR else self._console
        tag = f"[dim]{now:%H:%M:%S}[/dim] [bold]{level}[/bold]"
        if stage:
            tag += f" [cyan]{stage}[/cyan]"

        with self._lock:
            console.print(tag, end=" ")
            # 消息里的路径可能带方括号，不能当作 markup 解析
            console.print(message, style=_LEVELS[level][1], markup=False)
            if self._log_file is not None:
                self._log_file.write(format_line(message, level, stage, now) + "\n")
                self._log_file.flush()

    def set_level(self, level: str):
        """设置最低输出级别，未知级别被忽略"""
        if level in _LEVELS:
            with self._lock:
                self._level = level

    def get_level(self) -> str:
        return self._level

    def set_log_file(self, file_path: Union[str, Path]):
        """追加写入日志文件，替换之前设置的文件"""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            self.close()
            self._log_file = open(path, 'a', encoding='utf-8')

    def close(self):
        with self._lock:
            if self._log_file is not None:
                self._log_file.close()
                self._log_file = None

    def debug(self, message: str, stage: Optional[str] = None):
        self._emit(message, OutputLevel.DEBUG, stage)

    def info(self, message: str, stage: Optional[str] = None):
        self._emit(message, OutputLevel.INFO, stage)

    def success(self, message: str, stage: Optional[str] = None):
        self._emit(message, OutputLevel.SUCCESS, stage)

    def warning(self, message: str, stage: Optional[str] = None):
        self._emit(message, OutputLevel.WARNING, stage)

    def error(self, message: str, stage: Optional[str] = None):
        self._emit(message, OutputLevel.ERROR, stage)


_facade: Optional[OutputFacade] = None


def get_output_facade() -> OutputFacade:
    """全局输出门面，首次使用时创建"""
    global _facade
    if _facade is None:
        _facade = OutputFacade()
    return _facade


def debug(message: str, stage: Optional[str] = None):
    get_output_facade().debug(message, stage)


def info(message: str, stage: Optional[str] = None):
    get_output_facade().info(message, stage)


def success(message: str, stage: Optional[str] = None):
    get_output_facade().success(message, stage)


def warning(message: str, stage: Optional[str] = None):
    get_output_facade().warning(message, stage)


def error(message: str, stage: Optional[str] = None):
    get_output_facade().error(message, stage)


def set_log_level(level: str):
    get_output_facade().set_level(level)


def set_log_file(file_path: Union[str, Path]):
    get_output_facade().set_log_file(file_path)


def close_logger():
    """关闭日志文件并丢弃全局门面"""
    global _facade
    if _facade is not None:
        _facade.close()
        _facade = None


def configure_logging(level: str = OutputLevel.INFO, log_file: Optional[Union[str, Path]] = None):
    """设置全局输出级别和可选的日志文件"""
    set_log_level(level)
    if log_file:
        set_log_file(log_file)


atexit.register(close_logger)
