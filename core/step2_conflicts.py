"""
Step-2: Conflict Resolution
目标文件名已存在时，追加 " (1)"、" (2)" ... 直到找到未被占用的名字

只在执行模式下使用；不做跨进程加锁，假定运行期间独占目录树。
"""

import os
from pathlib import Path
from typing import Union


def _exists(directory: Path, name: str) -> bool:
    # lexists: 失效的符号链接也算占用
    return os.path.lexists(directory / name)


def resolve_conflict(directory: Union[str, Path], name: str) -> str:
    """
    返回 directory 中尚不存在的文件名

    Args:
        directory: 目标目录
        name: 期望的文件名

    Returns:
        name 本身，或 "<base> (<n>)<ext>" 形式的第一个可用名字

    Example:
        >>> resolve_conflict("/photos", "photo.jpg")  # photo.jpg 已存在
        'photo (1).jpg'
    """
    directory = Path(directory)
    if not _exists(directory, name):
        return name

    base, ext = os.path.splitext(name)
    counter = 1
    while True:
        candidate = f"{base} ({counter}){ext}"
        if not _exists(directory, candidate):
            return candidate
        counter += 1
