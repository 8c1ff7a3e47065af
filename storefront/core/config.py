from pydantic_settings import BaseSettings
from typing import Optional
from enum import Enum


class Environment(str, Enum):

    """运行环境枚举"""
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):

    # 应用基础配置
    app_name: str = "Storefront API"
    app_version: str = "1.0.0"
    environment: Environment = Environment.TESTING
    debug: bool = True

    # 数据库配置
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "storefront_db"
    db_user: str = "storefront_user"
    db_password: str = "storefront_password"

    # Redis配置 (后台优惠券列表缓存)
    redis_url: Optional[str] = None
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    # 会话认证配置 (令牌由登录服务签发，这里只做校验)
    jwt_secret: str = "storefront-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    auth_cookie_name: str = "token"

    # 邮件配置
    resend_api_key: Optional[str] = None
    email_from: str = "orders@attitude.pk"
    store_name: str = "Attitude.pk"
    public_app_url: str = "http://localhost:3000"

    # 定时任务配置
    cron_secret: Optional[str] = None

    # 业务常量
    abandoned_min_age_hours: int = 1
    abandoned_max_age_hours: int = 24
    abandoned_batch_size: int = 20
    abandoned_admin_list_limit: int = 100
    trending_default_limit: int = 8
    coupon_cache_ttl: int = 1800

    # 日志配置
    log_level: str = "INFO"

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    @property
    def database_url_computed(self) -> str:
        """计算数据库URL"""
        if self.database_url:
            return self.database_url
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def redis_url_computed(self) -> str:
        """计算Redis URL"""
        if self.redis_url:
            return self.redis_url
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    class Config:
        env_file = ".env"
        case_sensitive = False


# 全局配置实例
settings = Settings()
