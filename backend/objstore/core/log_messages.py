"""
日志消息模板模块
统一管理所有存储相关的日志消息模板，便于维护和国际化
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 通用日志消息 ====================
    OPERATION_SUCCESS = "操作成功完成: {operation_name}"

    # ==================== 适配器相关 ====================
    ADAPTER_REGISTERED = "已注册存储适配器: {adapter}"
    ADAPTER_CREATE_FAILED = "创建存储适配器失败: {adapter}"

    # ==================== 存储桶相关 ====================
    BUCKET_CHECK_FAILED = "检查存储桶失败: {bucket}"
    BUCKET_CREATE_START = "存储桶不存在，开始创建: {bucket}"
    BUCKET_CREATE_SUCCESS = "存储桶创建成功: {bucket}"
    BUCKET_CREATE_FAILED = "创建存储桶失败: {bucket}"

    # ==================== 对象操作相关 ====================
    OBJECT_PUT_FAILED = "上传对象失败: {key}"
    OBJECT_GET_FAILED = "下载对象失败: {key}"
    OBJECT_DELETE_SUCCESS = "对象删除成功: {key}"
    OBJECT_DELETE_FAILED = "删除对象失败: {key}"
    OBJECT_HEAD_FAILED = "获取对象元数据失败: {key}"
    OBJECT_NOT_FOUND = "对象不存在: {key}"
    OBJECT_TAGGING_FAILED = "获取对象标签失败: {key}"
    PRESIGN_URL_FAILED = "生成预签名URL失败: {key}"

    # ==================== 列举相关 ====================
    LIST_OBJECTS_FAILED = "列举对象失败, prefix={prefix}"
    LIST_SKIP_DIR = "跳过目录占位对象: {key}"
    LIST_MAX_OBJECTS_REACHED = "全量列举达到数量上限，提前结束, total={total}"
    LIST_ENRICH_FAILED = "补全列举结果失败, prefix={prefix}"

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """获取结构化日志数据"""
        return kwargs


# 全局实例
log_messages = LogMessages()
