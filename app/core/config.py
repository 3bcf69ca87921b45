from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SheetsSettings(BaseModel):
	"""Google Sheets 相关配置。支持嵌套环境变量：
	- SHL_SHEETS__SPREADSHEET_ID
	- SHL_SHEETS__API_KEY
	- SHL_SHEETS__RANGE
	- SHL_SHEETS__BASE_URL
	- SHL_SHEETS__TIMEOUT_SECONDS
	"""

	spreadsheet_id: Optional[str] = Field(default=None, description="默认 spreadsheet ID")
	api_key: Optional[str] = Field(default=None, description="Google API Key")
	range: str = Field(default="Sheet1", description="读写范围，通常为 sheet 名称")
	base_url: str = Field(
		default="https://sheets.googleapis.com/v4/spreadsheets",
		description="Sheets v4 spreadsheets 接口前缀",
	)
	timeout_seconds: int = Field(
		default=10, ge=1, le=120, description="HTTP 请求超时时间（秒）"
	)

	@field_validator("spreadsheet_id", "api_key", mode="before")
	@classmethod
	def _blank_to_none(cls, v):
		if isinstance(v, str) and not v.strip():
			return None
		return v


class RedisSettings(BaseModel):
	"""Redis 基础配置（用于保存用户偏好）。优先使用 `url`，否则拼装分段配置。支持：
	- SHL_REDIS__URL
	- SHL_REDIS__HOST / PORT / DB / USERNAME / PASSWORD / SSL
	"""

	url: Optional[str] = Field(default=None, description="Redis 连接 URL，优先使用")
	host: str = Field(default="127.0.0.1", description="Redis 主机")
	port: int = Field(default=6379, ge=1, le=65535, description="Redis 端口")
	db: int = Field(default=0, ge=0, description="Redis DB 索引")
	username: Optional[str] = Field(default=None, description="用户名，可选")
	password: Optional[str] = Field(default=None, description="密码，可选")
	ssl: bool = Field(default=False, description="是否启用 SSL")

	@property
	def dsn(self) -> str:
		if self.url:
			return self.url
		scheme = "rediss" if self.ssl else "redis"
		auth_part = ""
		if self.username and self.password:
			auth_part = f"{self.username}:{self.password}@"
		elif self.password and not self.username:
			auth_part = f":{self.password}@"
		return f"{scheme}://{auth_part}{self.host}:{self.port}/{self.db}"


class Settings(BaseSettings):

	app_name: str = "Sheet Lister API"
	debug: bool = False
	log_level: str = "INFO"

	# 嵌套配置
	sheets: SheetsSettings = Field(default_factory=SheetsSettings)
	redis: RedisSettings = Field(default_factory=RedisSettings)

	model_config = SettingsConfigDict(
		env_prefix="SHL_",
		case_sensitive=False,
		env_nested_delimiter="__",
		env_file=".env",
		env_file_encoding="utf-8",
	)


settings = Settings()
