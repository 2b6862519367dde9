"""
Step-3: Rename Execution
预览模式只打印计划；执行模式逐个解决冲突并改名，单个失败不影响其他文件

流程：扫描 -> 生成计划 -> {预览全部 | 逐个改名} -> 汇总

📅 Last Updated: 2026-10-17
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from core.step0_indexing import FileRecord, resolve_root, run_step0
from core.step1_naming import RenamePlan, plan_renames
from core.step2_conflicts import resolve_conflict


def _new_log() -> Dict[str, List[Dict[str, Any]]]:
    return {
        'renamed': [],
        'previewed': [],
        'skipped': [],
        'errors': [],
        'conflicts': [],
    }


class RenameExecutor:
    """
    改名执行器 - 预览或执行改名计划
    """

    def __init__(self, root: Path, show_progress: bool = True):
        """
        Args:
            root: 根目录（用于显示相对路径）
            show_progress: 是否显示 tqdm 进度条
        """
        self.root = root
        self.show_progress = show_progress

    def _display(self, path: Path) -> str:
        try:
            return os.path.relpath(path, self.root)
        except ValueError:
            # Windows 下不同盘符
            return str(path)

    def preview(self, plans: List[RenamePlan]) -> Dict[str, List[Dict[str, Any]]]:
        """
        预览模式：打印每个计划的当前路径和目标路径，不修改文件系统

        不做冲突检查，目标名可能与实际执行时不同。
        """
        log = _new_log()
        for plan in plans:
            print(f"[Preview] {plan.source} -> {plan.target}")
            log['previewed'].append({
                'from': str(plan.source),
                'to': str(plan.target),
            })
        return log

    def execute(self, plans: List[RenamePlan]) -> Dict[str, List[Dict[str, Any]]]:
        """
        执行模式：解决冲突后在原目录内改名

        Returns:
            改名日志
        """
        log = _new_log()
        for plan in tqdm(plans, desc="Renaming images", disable=not self.show_progress):
            directory = plan.record.directory
            new_name = resolve_conflict(directory, plan.proposed_name)
            if new_name != plan.proposed_name:
                tqdm.write(f"[Conflict] {plan.proposed_name} exists, using {new_name}")
                log['conflicts'].append({
                    'original': plan.proposed_name,
                    'resolved': new_name,
                })

            new_path = directory / new_name
            try:
                os.rename(plan.source, new_path)
            except OSError as e:
                tqdm.write(f"[Error] Error renaming {self._display(plan.source)}: {e}")
                log['errors'].append({
                    'from': str(plan.source),
                    'to': str(new_path),
                    'error': str(e),
                })
                continue

            tqdm.write(f"Renamed: {plan.current_name} -> {new_name}")
            log['renamed'].append({
                'from': str(plan.source),
                'to': str(new_path),
            })
        return log


def run_rename(settings: Dict[str, Any], root: Optional[Path] = None) -> Dict[str, List[Dict[str, Any]]]:
    """
    运行完整流程：扫描 -> 计划 -> 预览/执行 -> 汇总

    Args:
        settings: 运行参数（ConfigLoader.to_dict() 的结果）
        root: 根目录；None 时使用 settings['root'] 或当前工作目录

    Returns:
        改名日志

    Raises:
        ScanError: 根目录不可访问（在任何改名之前）
    """
    root = resolve_root(root if root is not None else settings.get('root'))
    dry_run = bool(settings.get('dry_run', False))

    print("=" * 60)
    print("Image Path-Prefix Rename")
    print("=" * 60)
    print(f"Root: {root}")
    print(f"Mode: {'DRY RUN (no changes)' if dry_run else 'RENAME'}")

    records: List[FileRecord] = run_step0(root)
    if not records:
        print("No matching image files found. Nothing to do.")
        return _new_log()

    plans = plan_renames(records, root)
    planned = {plan.source for plan in plans}
    skipped = [r for r in records if r.path not in planned]
    print(f"[Step-1] {len(plans)} files to rename, {len(skipped)} already named (skipped)")

    executor = RenameExecutor(root, show_progress=settings.get('show_progress', True))
    if dry_run:
        log = executor.preview(plans)
    else:
        log = executor.execute(plans)
    log['skipped'] = [{'path': str(r.path)} for r in skipped]

    print("=" * 60)
    if dry_run:
        print(f"Dry run complete: {len(log['previewed'])} files would be renamed, "
              f"{len(log['skipped'])} skipped. No files were changed.")
    else:
        print(f"Complete! Renamed {len(log['renamed'])} files, "
              f"{len(log['errors'])} errors, {len(log['conflicts'])} conflicts resolved, "
              f"{len(log['skipped'])} skipped.")
    print("=" * 60)
    return log
