"""
通用工具模块包
提供项目通用的工具函数和辅助类
"""

from .config_utils import (
    get_project_root,
    get_config_path,
    ensure_directory_exists
)

from .datetime_utils import (
    ZERO_TIME,
    is_zero_time,
    parse_cos_time,
    parse_http_time,
    format_http_time
)

from .task_group import BoundedTaskGroup

__all__ = [
    # config_utils
    'get_project_root', 'get_config_path', 'ensure_directory_exists',

    # datetime_utils
    'ZERO_TIME', 'is_zero_time', 'parse_cos_time', 'parse_http_time', 'format_http_time',

    # task_group
    'BoundedTaskGroup'
]
