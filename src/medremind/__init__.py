"""MedRemind: 用药提醒调度服务"""

__version__ = "0.1.0"
