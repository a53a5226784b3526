"""全局配置管理

所有用户可配置项均可通过 .env 文件或环境变量设置，运行时自动加载到此处。

使用方式：
    1. 手动创建 .env 文件，例如 ``DATABASE_URL=sqlite:///data/metadata.db``
    2. 或直接设置同名环境变量
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用配置 - 所有字段均可通过 .env 或环境变量覆盖"""

    # ========== 数据库（枚举元数据持久化） ==========
    database_url: str = "sqlite:///data/metadata.db"
    database_echo: bool = False

    # ========== 元数据 ==========
    # 使用已废弃的逐项枚举元数据挂载时是否输出警告
    warn_legacy_enum_items: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# 全局配置实例
settings = Settings()
