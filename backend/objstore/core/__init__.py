"""
核心模块
包含配置、日志和存储抽象
"""
