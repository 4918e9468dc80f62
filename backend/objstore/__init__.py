"""
objstore
腾讯云COS对象存储抽象层：统一的对象读写、分页列举与并发补全
"""

__version__ = "1.0.0"
