"""
Step-0: Image Indexing
确定根目录，递归扫描 .jpg / .jpeg 文件，生成按完整路径排序的文件记录列表

📅 Last Updated: 2026-10-17
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

IMAGE_EXTENSIONS = ('.jpg', '.jpeg')


class ScanError(OSError):
    """根目录不可访问，扫描无法进行"""


@dataclass(frozen=True)
class FileRecord:
    """扫描得到的单个图像文件（只读）"""

    path: Path
    directory: Path
    name: str

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileRecord":
        path = Path(path)
        return cls(path=path, directory=path.parent, name=path.name)


def resolve_root(path: Optional[Union[str, Path]] = None) -> Path:
    """
    返回根目录的绝对规范路径（默认为当前工作目录）

    只在运行开始时调用一次，之后作为参数传给各步骤。
    """
    raw = os.fspath(path) if path is not None else os.getcwd()
    return Path(os.path.normpath(os.path.abspath(raw)))


class ImageScanner:
    """
    图像扫描器 - 递归扫描根目录下的图像文件
    """

    def __init__(self, root: Union[str, Path]):
        """
        初始化扫描器

        Args:
            root: 根目录（应已由 resolve_root 规范化）
        """
        self.root = Path(root)
        self.warnings: List[str] = []

    def _matches(self, filename: str) -> bool:
        return os.path.splitext(filename)[1].lower() in IMAGE_EXTENSIONS

    def _on_walk_error(self, error: OSError) -> None:
        # 根目录读不了是致命错误；子目录读不了只警告
        if error.filename is not None and Path(error.filename) == self.root:
            raise ScanError(error.errno, f"Cannot read root directory: {error.strerror}", error.filename)
        message = f"Cannot read {error.filename}: {error.strerror or error}"
        self.warnings.append(message)
        print(f"[Warning] {message}")

    def _check_root(self) -> None:
        if not self.root.exists():
            raise ScanError(f"Root directory not found: {self.root}")
        if not self.root.is_dir():
            raise ScanError(f"Root is not a directory: {self.root}")
        try:
            with os.scandir(self.root):
                pass
        except OSError as e:
            raise ScanError(f"Cannot read root directory {self.root}: {e.strerror or e}") from e

    def scan(self) -> List[FileRecord]:
        """
        扫描目录

        Returns:
            文件记录列表，按完整路径字典序排序

        Raises:
            ScanError: 根目录不存在或不可读
        """
        self._check_root()

        records = []
        for dirpath, _dirnames, filenames in os.walk(self.root, onerror=self._on_walk_error):
            for filename in filenames:
                if not self._matches(filename):
                    continue
                full_path = Path(dirpath) / filename
                # 只要普通文件（排除指向目录或失效的符号链接等）
                if not full_path.is_file():
                    continue
                records.append(FileRecord.from_path(full_path))

        records.sort(key=lambda r: str(r.path))
        return records


def run_step0(root: Path) -> List[FileRecord]:
    """
    运行Step-0: 扫描图像

    Args:
        root: 根目录

    Returns:
        文件记录列表
    """
    scanner = ImageScanner(root)
    print(f"[Step-0] Scanning directory: {root}")
    print(f"[Step-0] Extensions: {', '.join(IMAGE_EXTENSIONS)}")

    records = scanner.scan()

    print(f"[Step-0] Found {len(records)} image files")
    if scanner.warnings:
        print(f"[Step-0] Unreadable directories skipped: {len(scanner.warnings)}")
    return records
