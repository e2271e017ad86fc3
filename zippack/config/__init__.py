"""配置模块

release YAML 文件的模型、加载、校验与保存。
"""

from .schema import (
    ArchiveModel,
    ConfigModel,
    FingerprintModel,
    ReleaseModel,
    RulesModel,
    ZippackConfig,
)
from .loader import (
    ConfigError,
    ConfigLoader,
    ConfigValidationError,
    ValidationResult,
    config_loader,
    describe_errors,
    load_config,
    save_config,
    validate_config,
    validate_config_with_result,
)

__all__ = [
    "ZippackConfig",
    "ReleaseModel",
    "ArchiveModel",
    "FingerprintModel",
    "RulesModel",
    "ConfigModel",

    "ConfigLoader",
    "ValidationResult",
    "ConfigError",
    "ConfigValidationError",

    "config_loader",
    "describe_errors",
    "load_config",
    "save_config",
    "validate_config",
    "validate_config_with_result",
]
