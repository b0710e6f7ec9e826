"""
异常定义
"""


class ConfigurationError(ValueError):
    """配置无效（例如天数为负数或缺少域名列表）"""
    pass
