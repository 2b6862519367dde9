"""
Settings Loader for the image path-prefix renamer
📅 Last Updated: 2026-10-17

没有配置文件：所有运行参数来自代码中的默认值，命令行只覆盖 dry_run。
"""

from typing import Any, Dict, Optional
from omegaconf import OmegaConf, DictConfig


# 默认运行参数
DEFAULT_SETTINGS: Dict[str, Any] = {
    'root': None,              # None 表示使用当前工作目录
    'dry_run': False,
    'show_progress': True,
}


class ConfigLoader:
    """
    配置加载器 - 负责构建和管理一次运行的参数
    """

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        """
        初始化配置加载器

        Args:
            overrides: 覆盖默认值的参数，例如 {"dry_run": True}
        """
        self.config: DictConfig = self._build_config(overrides or {})

    def _build_config(self, overrides: Dict[str, Any]) -> DictConfig:
        """
        合并默认值与覆盖值并返回OmegaConf对象

        Returns:
            DictConfig: 配置对象
        """
        unknown = set(overrides) - set(DEFAULT_SETTINGS)
        if unknown:
            raise KeyError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        config = OmegaConf.merge(OmegaConf.create(DEFAULT_SETTINGS), OmegaConf.create(overrides))
        validate_settings(config)
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        获取配置值，支持点分隔的键

        Example:
            >>> loader = ConfigLoader()
            >>> loader.get("dry_run")
            False
        """
        return OmegaConf.select(self.config, key, default=default)

    def set(self, key: str, value: Any) -> None:
        """设置配置值（设置后重新校验）"""
        OmegaConf.update(self.config, key, value)
        validate_settings(self.config)

    def to_dict(self) -> Dict[str, Any]:
        """
        将配置转换为普通字典

        Returns:
            Dict: 配置字典
        """
        return OmegaConf.to_container(self.config, resolve=True)

    def __repr__(self) -> str:
        return f"ConfigLoader(dry_run={self.config.dry_run}, root={self.config.root})"


# ============================================
# Utility Functions
# ============================================

def load_config(dry_run: bool = False, **overrides: Any) -> ConfigLoader:
    """
    便捷函数：加载配置

    Args:
        dry_run: 是否只预览
        **overrides: 其他覆盖值

    Returns:
        ConfigLoader: 配置加载器实例
    """
    overrides['dry_run'] = dry_run
    return ConfigLoader(overrides=overrides)


def validate_settings(config: DictConfig) -> None:
    """
    验证运行参数的一致性

    Args:
        config: 配置对象

    Raises:
        ValueError: 如果配置不一致
    """
    if not isinstance(config.dry_run, bool):
        raise ValueError(f"dry_run must be a boolean, got {config.dry_run!r}")

    if not isinstance(config.show_progress, bool):
        raise ValueError(f"show_progress must be a boolean, got {config.show_progress!r}")

    root = config.root
    if root is not None and (not isinstance(root, str) or not root.strip()):
        raise ValueError(f"root must be a non-empty path string or None, got {root!r}")


# ============================================
# Testing
# ============================================

if __name__ == "__main__":
    print("Testing ConfigLoader...")
    loader = load_config(dry_run=True)
    print(f"✅ Settings built: {loader}")
    print(OmegaConf.to_yaml(loader.config))
