"""
配置加载器

读取 release YAML 文件，解析相对目录并交给 Pydantic 校验。
"""

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .schema import ZippackConfig

CONFIG_SUFFIXES = ('.yaml', '.yml')

# 这些字段的相对路径以配置文件所在目录为基准
PATH_FIELDS: Tuple[Tuple[str, str], ...] = (
    ('release', 'input_dir'),
    ('release', 'output_dir'),
)


class ConfigError(Exception):
    """配置错误基类"""
    pass


class ConfigValidationError(ConfigError):
    """配置验证错误，errors 为 Pydantic 的原始错误列表"""

    def __init__(self, message: str, errors: List[Dict[str, Any]]):
        super().__init__(message)
        self.errors = errors

    def format_errors(self) -> str:
        lines = []
        for location, message, value in describe_errors(self.errors):
            lines.append(f"{location}: {message}")
            if value:
                lines.append(f"  当前值: {value}")
        return "\n".join(lines)

    def format_errors_json(self) -> str:
        return json.dumps(self.errors, ensure_ascii=False, indent=2, default=str)


def describe_errors(errors: List[Dict[str, Any]]) -> List[Tuple[str, str, str]]:
    """把错误列表转换为 (位置, 信息, 输入值) 三元组

    没有位置的错误归到 "根级别"。
    """
    rows = []
    for item in errors:
        location = " -> ".join(str(part) for part in item.get('loc', ())) or "根级别"
        value = item.get('input', '')
        rows.append((location, item.get('msg', '未知错误'), "" if value in (None, '') else str(value)))
    return rows


@dataclass
class ValidationResult:
    """配置验证结果"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    config: Optional[ZippackConfig] = None


class ConfigLoader:
    """配置加载器"""

    def __init__(self):
        self.yaml = YAML()
        self.yaml.preserve_quotes = True
        self.yaml.width = 4096

    def read(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """读取 YAML 文件的原始内容，不做校验

        Raises:
            ConfigError: 文件不存在、扩展名不对、解析失败或根节点不是字典
        """
        config_path = Path(config_path)
        if not config_path.is_file():
            raise ConfigError(f"找不到配置文件: {config_path}")
        if config_path.suffix.lower() not in CONFIG_SUFFIXES:
            raise ConfigError(f"只支持 {'/'.join(CONFIG_SUFFIXES)} 配置文件: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                raw = self.yaml.load(f)
        except YAMLError as e:
            raise ConfigError(f"{config_path.name} 不是合法的 YAML: {e}") from e
        except OSError as e:
            raise ConfigError(f"无法读取 {config_path}: {e}") from e

        if raw is None:
            raise ConfigError(f"配置文件为空: {config_path}")
        if not isinstance(raw, dict):
            raise ConfigError(f"配置文件顶层必须是映射: {config_path}")
        return raw

    def load_from_file(self, config_path: Union[str, Path]) -> ZippackConfig:
        """加载并校验配置文件

        Raises:
            ConfigError: 读取失败
            ConfigValidationError: 校验失败
        """
        config_path = Path(config_path)
        return self.load_from_dict(self.read(config_path), config_path.parent)

    def load_from_dict(self, data: Dict[str, Any], base_path: Optional[Path] = None) -> ZippackConfig:
        """校验配置字典，传入的字典不会被修改

        Args:
            data: 配置数据
            base_path: 给出时相对目录以它为基准解析

        Raises:
            ConfigValidationError: 校验失败
        """
        data = copy.deepcopy(dict(data))
        if base_path is not None:
            resolve_relative_paths(data, Path(base_path))

        try:
            return ZippackConfig.from_dict(data)
        except ValidationError as e:
            raise ConfigValidationError(f"配置校验失败 ({e.error_count()} 处错误)", e.errors()) from e

    def save_to_file(self, config: ZippackConfig, output_path: Union[str, Path]) -> None:
        """写出配置文件，父目录不存在时自动创建

        Raises:
            ConfigError: 写入失败
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                self.yaml.dump(config.to_dict(), f)
        except (OSError, YAMLError) as e:
            raise ConfigError(f"无法写入配置文件 {output_path}: {e}") from e

    def validate_file(self, config_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """校验配置文件，返回错误列表，空列表表示通过"""
        try:
            self.load_from_file(config_path)
        except ConfigValidationError as e:
            return e.errors
        except ConfigError as e:
            return [{'loc': (), 'msg': str(e), 'type': 'config_error'}]
        return []


def resolve_relative_paths(data: Dict[str, Any], base_path: Path) -> None:
    """就地把 PATH_FIELDS 中的相对路径解析为以 base_path 为基准的绝对路径"""
    for section, key in PATH_FIELDS:
        values = data.get(section)
        if not isinstance(values, dict):
            continue
        value = values.get(key)
        if isinstance(value, str) and value.strip() and not Path(value).is_absolute():
            values[key] = str((base_path / value).resolve())


config_loader = ConfigLoader()


def load_config(config_path: Union[str, Path]) -> ZippackConfig:
    return config_loader.load_from_file(config_path)


def validate_config(config_path: Union[str, Path]) -> List[Dict[str, Any]]:
    return config_loader.validate_file(config_path)


def validate_config_with_result(config_or_path: Union[ZippackConfig, str, Path]) -> ValidationResult:
    """校验配置对象或配置文件，失败时不抛出异常"""
    if isinstance(config_or_path, ZippackConfig):
        return ValidationResult(is_valid=True, config=config_or_path)

    try:
        config = load_config(config_or_path)
    except ConfigValidationError as e:
        return ValidationResult(is_valid=False, errors=[f"{loc}: {msg}" for loc, msg, _ in describe_errors(e.errors)])
    except ConfigError as e:
        return ValidationResult(is_valid=False, errors=[str(e)])
    return ValidationResult(is_valid=True, config=config)


def save_config(config: ZippackConfig, output_path: Union[str, Path]) -> None:
    config_loader.save_to_file(config, output_path)
