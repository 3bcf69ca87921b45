import logging
from typing import Optional

from app.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
	"""根据 SHL_LOG_LEVEL 配置根日志，只在应用启动时调用一次"""
	name = (level or settings.log_level or "INFO").upper()
	logging.basicConfig(level=getattr(logging, name, logging.INFO), format=_FORMAT)
	# httpx 默认在 INFO 级别打印完整 URL（包含 key 参数）
	logging.getLogger("httpx").setLevel(logging.WARNING)
