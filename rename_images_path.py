#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
给当前目录下所有 .jpg / .jpeg 图片加上所在子目录的前缀，便于之后合并到同一个文件夹。

用法：
  cd /path/to/photos
  python rename_images_path.py --dry-run   # 先预览
  python rename_images_path.py             # 实际改名

photos/vacation/IMG1.jpg -> photos/vacation/photos_vacation_IMG1.jpg
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

KNOWN_LIMITATION = (
    "Note: a file is skipped only when its new name equals its current name. "
    "Running again over already renamed files adds the prefix a second time."
)


def main(argv=None):
    import argparse
    from core.step0_indexing import ScanError
    from core.step3_execute import run_rename
    from utils import load_config

    parser = argparse.ArgumentParser(
        description="Prefix image filenames with their folder path relative to the current directory",
        epilog=KNOWN_LIMITATION,
    )
    parser.add_argument("-n", "--dry-run", action="store_true", help="仅预览，不实际改名")
    args = parser.parse_args(argv)

    loader = load_config(dry_run=args.dry_run)

    try:
        run_rename(loader.to_dict())
    except ScanError as e:
        print(f"[ERROR] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
