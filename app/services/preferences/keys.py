"""
偏好存储键生成规则
"""


class PreferenceKeys:
    """偏好键生成器"""

    # 键前缀
    PREFIX = "shl"

    # 键模板
    SHEET_ID = "{prefix}:pref:sheet_id:{owner}"

    DEFAULT_OWNER = "default"

    @classmethod
    def sheet_id_key(cls, owner: str = None) -> str:
        """
        生成“当前选择的 spreadsheet ID”偏好键

        Args:
            owner: 偏好归属（浏览器/用户标识），为空时使用 default

        Returns:
            Redis 键
        """
        owner = (owner or "").strip() or cls.DEFAULT_OWNER
        return cls.SHEET_ID.format(prefix=cls.PREFIX, owner=owner)
