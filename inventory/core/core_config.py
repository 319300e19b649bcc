from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    # API 配置
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8005
    API_DEBUG: bool = False
    API_PREFIX: str = "/api/v1/inventory"

    # 数据库配置（SQLite 文件）
    DB_PATH: str = "inventory.db"

    # 欄位長度限制
    TABLE_MAX_LENGTH_NAME: int = 255
    TABLE_MAX_LENGTH_DESCRIPTION: int = 1000
    TABLE_MAX_LENGTH_LINK: int = 500

    # 照片上传配置
    UPLOAD_DIR: str = "images"
    ALLOWED_IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".gif", ".webp")
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024

    # CORS 配置（环境变量中使用逗号分隔，如：http://localhost:3000,http://localhost:8080）
    CORS_ORIGINS: str = "*"

    # 控制台日志开关（主要用于本地開發調試）
    LOG_REQUEST_CONSOLE: bool = False
    LOG_RESPONSE_CONSOLE: bool = False

    # 客户端配置（扫码、批量移动）
    API_BASE_URL: str = "http://localhost:8005/api/v1/inventory"
    CLIENT_TIMEOUT: float = 15.0
    CLIENT_RETRIES: int = 3
    CLIENT_RETRY_BASE_DELAY: float = 1.0
    CLIENT_RETRY_MAX_DELAY: float = 10.0
    SCAN_COOLDOWN_SECONDS: float = 2.0
    PHOTO_ATTACHMENT: str = "file"  # file | data_uri

    # 标签打印机（可选）
    PRINTER_URL: Optional[str] = None
    PRINTER_QR_SIZE: int = 128

    @property
    def database_url_async(self) -> str:
        """异步数据库连接 URL (使用 aiosqlite)"""
        return f"sqlite+aiosqlite:///{self.DB_PATH}"

    @property
    def image_url_path(self) -> str:
        """照片对外访问路径"""
        return f"{self.API_PREFIX}/images"

    @property
    def cors_origins_list(self) -> list[str]:
        """获取 CORS 来源列表"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


# 全局配置实例
settings = Settings()
