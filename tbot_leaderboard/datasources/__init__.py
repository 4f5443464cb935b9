from .base import DataSource
from .dialog_tbot import DialogTbotDataSource

__all__ = [
    "DataSource",
    "DialogTbotDataSource",
]
