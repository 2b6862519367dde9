"""
Step-1: Prefix Naming
按文件所在目录相对根目录的路径生成前缀，并计算每个文件的目标文件名

规则：a/b/c/IMG.jpg -> a_b_c_IMG.jpg；根目录下的文件不改名。

📅 Last Updated: 2026-10-17
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

from core.step0_indexing import FileRecord

# 任意连续的路径分隔符（同时处理 / 和 \）
_SEPARATOR_RUN = re.compile(r"[\\/]+")


@dataclass(frozen=True)
class RenamePlan:
    """单个文件的改名计划：当前文件名 -> 目标文件名（同一目录内）"""

    record: FileRecord
    proposed_name: str

    @property
    def current_name(self) -> str:
        return self.record.name

    @property
    def source(self) -> Path:
        return self.record.path

    @property
    def target(self) -> Path:
        return self.record.directory / self.proposed_name


def relative_prefix(directory: Union[str, Path], root: Union[str, Path]) -> str:
    """
    计算目录相对根目录的前缀

    Args:
        directory: 文件所在目录（绝对路径）
        root: 根目录（绝对路径）

    Returns:
        用下划线连接的相对路径；directory 就是根目录时返回空字符串
    """
    dir_str = os.fspath(directory)
    root_str = os.fspath(root)

    relative = None
    if dir_str.lower().startswith(root_str.lower()):
        rest = dir_str[len(root_str):]
        # 必须在路径分隔处截断：/data 不是 /database 的父目录
        if not rest or rest[0] in "\\/" or root_str.endswith(("\\", "/")):
            relative = rest.lstrip("\\/")
    if relative is None:
        # 不在根目录下（如其他盘符）：只去掉盘符，尽量给出一个名字
        relative = os.path.splitdrive(dir_str)[1]

    prefix = _SEPARATOR_RUN.sub("_", relative)
    return prefix.strip("_")


def build_target_name(name: str, prefix: str) -> str:
    """有前缀时返回 "<prefix>_<name>"，否则原样返回"""
    if not prefix:
        return name
    return f"{prefix}_{name}"


def plan_renames(records: Iterable[FileRecord], root: Union[str, Path]) -> List[RenamePlan]:
    """
    为每个文件生成改名计划，跳过目标名与当前名相同的文件

    注意：只比较当前名和目标名是否相同。已经带前缀的文件再次运行会再加一次前缀。

    Args:
        records: Step-0 的文件记录
        root: 根目录

    Returns:
        需要改名的计划列表（保持输入顺序）
    """
    plans = []
    for record in records:
        prefix = relative_prefix(record.directory, root)
        proposed = build_target_name(record.name, prefix)
        if proposed == record.name:
            continue
        plans.append(RenamePlan(record=record, proposed_name=proposed))
    return plans
